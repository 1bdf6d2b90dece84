from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Caller:
    """Identity resolved from a bearer token for the duration of one request."""

    account_id: int
    role: Role
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {"id": self.account_id, "name": self.name, "role": self.role.value}
