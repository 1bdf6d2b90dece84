from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import is_blank
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..users.model import Account
from ..users.repository import AccountRepository
from .model import Caller
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    account: Account


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        # placeholder or corrupted hashes
        return False


class AuthService:
    """Use case: login and password change."""

    def __init__(self, accounts: AccountRepository, tokens: TokenService, *, distinct_login_errors: bool = True):
        self._accounts = accounts
        self._tokens = tokens
        self._distinct_login_errors = bool(distinct_login_errors)

    def login(self, email: Optional[str], password: Optional[str]) -> LoginResult:
        if is_blank(email) or is_blank(password):
            raise ValidationError("Email and password are required")

        account = self._accounts.get_by_email(str(email).strip().lower())
        if not account:
            logger.warning("login failed: unknown email %s", email)
            if self._distinct_login_errors:
                raise NotFoundError("User Not Found")
            raise AuthenticationError("Invalid email or password")

        if not _password_matches(account.password_hash, str(password)):
            logger.warning("login failed: wrong password for account %s", account.account_id)
            if self._distinct_login_errors:
                raise AuthenticationError("Wrong Password")
            raise AuthenticationError("Invalid email or password")

        token = self._tokens.issue(account_id=account.account_id, role=account.role)
        logger.info("account %s logged in", account.account_id)
        return LoginResult(token=token, account=account)

    def change_password(
        self,
        *,
        caller: Caller,
        old_password: Optional[str],
        new_password: Optional[str],
        confirm_password: Optional[str],
    ) -> None:
        fields = (old_password, new_password, confirm_password)
        # only non-empty strings count as passwords
        if not all(isinstance(f, str) and f for f in fields):
            raise ValidationError("All password fields are required")
        if new_password != confirm_password:
            raise ValidationError("New password and confirm password do not match")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

        account = self._accounts.get_by_id(caller.account_id)
        if not account:
            raise NotFoundError("User not found")
        if not _password_matches(account.password_hash, old_password):
            raise AuthenticationError("Current password is incorrect")
        if _password_matches(account.password_hash, new_password):
            raise ValidationError("New password must be different from current password")

        self._accounts.update_password(account.account_id, password_hash=generate_password_hash(new_password))
        logger.info("account %s changed password", account.account_id)
