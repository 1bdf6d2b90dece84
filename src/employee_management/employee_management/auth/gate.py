"""Access control gate: bearer token -> caller identity, plus role/ownership checks."""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.repository import AccountRepository
from .model import Caller
from .tokens import TokenService


def require_admin(caller: Caller, message: str = "Admin access required") -> None:
    if not caller.is_admin:
        raise AuthorizationError(message)


def require_self_or_admin(caller: Caller, owner_account_id: Optional[int], message: str = "Access denied") -> None:
    if caller.is_admin:
        return
    if owner_account_id is None or int(owner_account_id) != caller.account_id:
        raise AuthorizationError(message)


def current_caller() -> Caller:
    return g.caller


class AccessGate:
    def __init__(self, tokens: TokenService, accounts: AccountRepository):
        self._tokens = tokens
        self._accounts = accounts

    def resolve(self, authorization: Optional[str]) -> Caller:
        if not authorization:
            raise AuthenticationError("No token provided")
        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("No token provided")

        claims = self._tokens.decode(token.strip())
        try:
            account_id = int(claims["sub"])
        except (TypeError, ValueError):
            raise AuthenticationError("Token not valid")

        account = self._accounts.get_by_id(account_id)
        if not account:
            raise AuthenticationError("User not found")
        # role is read from the stored account, not from the token claims
        return Caller(account_id=account.account_id, role=Role(account.role), name=account.name)

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.caller = self.resolve(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    def admin_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.caller = self.resolve(request.headers.get("Authorization"))
            require_admin(g.caller)
            return view(*args, **kwargs)

        return wrapper
