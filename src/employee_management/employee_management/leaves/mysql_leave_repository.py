from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.mysql_employee_repository import EMPLOYEE_SUMMARY_COLUMNS, EMPLOYEE_SUMMARY_JOINS, row_to_summary
from .model import LeaveDetails, LeaveRequest
from .repository import LeaveRepository

_LEAVE_COLUMNS = """
    l.leave_id, l.employee_id, l.leave_type, l.from_date, l.to_date, l.description,
    l.status, l.applied_date, l.approved_by, l.approved_date
"""

_DETAILS_QUERY = f"""
    SELECT {_LEAVE_COLUMNS}, {EMPLOYEE_SUMMARY_COLUMNS}
    FROM leave_requests l
    {EMPLOYEE_SUMMARY_JOINS.format(alias="l")}
"""


def _row_to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        description=r["description"],
        status=LeaveStatus(r["status"]),
        applied_date=r["applied_date"],
        approved_by=r.get("approved_by"),
        approved_date=r.get("approved_date"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        description: str,
        applied_date: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, from_date, to_date, description, status, applied_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    from_date,
                    to_date,
                    description,
                    LeaveStatus.PENDING.value,
                    applied_date,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_LEAVE_COLUMNS} FROM leave_requests l WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def get_details(self, leave_id: int) -> Optional[LeaveDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DETAILS_QUERY + " WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return LeaveDetails(leave=_row_to_leave(r), employee=row_to_summary(r)) if r else None

    def list_details(self, *, employee_id: Optional[int] = None) -> Sequence[LeaveDetails]:
        sql = _DETAILS_QUERY
        params: tuple = ()
        if employee_id is not None:
            sql += " WHERE l.employee_id=%s"
            params = (int(employee_id),)
        sql += " ORDER BY l.applied_date DESC, l.leave_id DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [LeaveDetails(leave=_row_to_leave(r), employee=row_to_summary(r)) for r in fetchall(cur)]

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        approved_date: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_date=%s, updated_at=CURRENT_TIMESTAMP
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, int(approved_by), approved_date, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            return cur.rowcount > 0
