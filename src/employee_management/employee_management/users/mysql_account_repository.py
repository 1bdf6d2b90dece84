from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository

_ACCOUNT_COLUMNS = "account_id, name, email, password_hash, role, profile_image"


def _row_to_account(row: dict) -> Account:
    return Account(
        account_id=int(row["account_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        profile_image=row.get("profile_image"),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: int) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE account_id=%s", (int(account_id),))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email=%s", (email.strip().lower(),))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        profile_image: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO accounts(name, email, password_hash, role, profile_image)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, email.strip().lower(), password_hash, role.value, profile_image),
            )
            return int(cur.lastrowid)

    def update_password(self, account_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE accounts SET password_hash=%s, updated_at=CURRENT_TIMESTAMP WHERE account_id=%s",
                (password_hash, int(account_id)),
            )
            return cur.rowcount > 0
