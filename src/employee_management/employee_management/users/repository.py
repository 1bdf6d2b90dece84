from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import Account


class AccountRepository(Protocol):
    """Repository interface for Account.

    Services depend on this protocol, never on a concrete database.
    Emails are stored and looked up lower-cased.
    """

    def get_by_id(self, account_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        profile_image: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_password(self, account_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError
