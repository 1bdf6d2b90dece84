from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from ..employees.mysql_employee_repository import EMPLOYEE_SUMMARY_COLUMNS, EMPLOYEE_SUMMARY_JOINS, row_to_summary
from .model import SalaryDetails, SalaryRecord
from .repository import SalaryRepository

_SALARY_COLUMNS = """
    s.salary_id, s.employee_id, s.basic_salary, s.allowances, s.deductions, s.net_salary, s.pay_date
"""

_DETAILS_QUERY = f"""
    SELECT {_SALARY_COLUMNS}, {EMPLOYEE_SUMMARY_COLUMNS}
    FROM salary_records s
    {EMPLOYEE_SUMMARY_JOINS.format(alias="s")}
"""


def _row_to_salary(r: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        employee_id=int(r["employee_id"]),
        basic_salary=to_decimal(r["basic_salary"]),
        allowances=to_decimal(r["allowances"]),
        deductions=to_decimal(r["deductions"]),
        net_salary=to_decimal(r["net_salary"]),
        pay_date=r["pay_date"],
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
        pay_date: date,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_records(employee_id, basic_salary, allowances, deductions, net_salary, pay_date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), basic_salary, allowances, deductions, net_salary, pay_date),
            )
            return int(cur.lastrowid)

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SALARY_COLUMNS} FROM salary_records s WHERE s.salary_id=%s", (int(salary_id),))
            r = fetchone(cur)
            return _row_to_salary(r) if r else None

    def get_details(self, salary_id: int) -> Optional[SalaryDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DETAILS_QUERY + " WHERE s.salary_id=%s", (int(salary_id),))
            r = fetchone(cur)
            return SalaryDetails(salary=_row_to_salary(r), employee=row_to_summary(r)) if r else None

    def list_details(
        self,
        *,
        employee_id: Optional[int] = None,
        exclude_employee_status: Optional[EmployeeStatus] = None,
    ) -> Sequence[SalaryDetails]:
        clauses = ["1=1"]
        params: list[object] = []
        if employee_id is not None:
            clauses.append("s.employee_id=%s")
            params.append(int(employee_id))
        if exclude_employee_status is not None:
            clauses.append("e.status<>%s")
            params.append(exclude_employee_status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _DETAILS_QUERY + f" WHERE {' AND '.join(clauses)} ORDER BY s.pay_date DESC, s.salary_id DESC",
                tuple(params),
            )
            return [SalaryDetails(salary=_row_to_salary(r), employee=row_to_summary(r)) for r in fetchall(cur)]

    def update(
        self,
        salary_id: int,
        *,
        basic_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        net_salary: Decimal,
        pay_date: date,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_records
                SET basic_salary=%s, allowances=%s, deductions=%s, net_salary=%s, pay_date=%s,
                    updated_at=CURRENT_TIMESTAMP
                WHERE salary_id=%s
                """,
                (basic_salary, allowances, deductions, net_salary, pay_date, int(salary_id)),
            )
            return cur.rowcount > 0

    def delete(self, salary_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_records WHERE salary_id=%s", (int(salary_id),))
            return cur.rowcount > 0
