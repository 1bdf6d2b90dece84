from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


def _row_to_department(r: dict) -> Department:
    return Department(dept_id=int(r["dept_id"]), dept_name=r["dept_name"], description=r.get("description"))


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, dept_name, description FROM departments ORDER BY dept_name")
            return [_row_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, dept_name, description FROM departments WHERE dept_id=%s", (int(dept_id),))
            r = fetchone(cur)
            return _row_to_department(r) if r else None

    def create(self, *, dept_name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(dept_name, description) VALUES(%s,%s)",
                (dept_name, description),
            )
            return int(cur.lastrowid)

    def update(self, dept_id: int, *, dept_name: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE departments
                SET dept_name=%s, description=%s, updated_at=CURRENT_TIMESTAMP
                WHERE dept_id=%s
                """,
                (dept_name, description, int(dept_id)),
            )
            return cur.rowcount > 0

    def delete(self, dept_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE dept_id=%s", (int(dept_id),))
            return cur.rowcount > 0

    def count_employees(self, dept_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE department_id=%s", (int(dept_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
