from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Domain entity: login identity (email/secret/role).

    Note: plain data object, no DB access code here.
    """

    account_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    profile_image: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_public_dict(self) -> dict:
        return {"id": self.account_id, "name": self.name, "role": self.role.value}
