from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.mysql_employee_repository import EMPLOYEE_SUMMARY_COLUMNS, EMPLOYEE_SUMMARY_JOINS, row_to_summary
from .model import AttendanceDetails, AttendanceRecord
from .repository import AttendanceRepository

_DETAILS_QUERY = f"""
    SELECT r.attendance_id, r.employee_id, r.work_date, r.status, {EMPLOYEE_SUMMARY_COLUMNS}
    FROM attendance_records r
    {EMPLOYEE_SUMMARY_JOINS.format(alias="r")}
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, status
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, *, employee_id: int, work_date: date, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    attendance_id=LAST_INSERT_ID(attendance_id),
                    status=VALUES(status),
                    updated_at=CURRENT_TIMESTAMP
                """,
                (int(employee_id), work_date, status.value),
            )
            return int(cur.lastrowid)

    def update_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, updated_at=CURRENT_TIMESTAMP
                WHERE attendance_id=%s
                """,
                (status.value, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceDetails]:
        clauses = ["r.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            clauses.append("r.employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _DETAILS_QUERY + f" WHERE {' AND '.join(clauses)} ORDER BY r.work_date ASC, e.employee_code ASC",
                tuple(params),
            )
            return [AttendanceDetails(record=_row_to_record(r), employee=row_to_summary(r)) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DETAILS_QUERY + " WHERE r.work_date=%s ORDER BY e.employee_code ASC", (work_date,))
            return [AttendanceDetails(record=_row_to_record(r), employee=row_to_summary(r)) for r in fetchall(cur)]
