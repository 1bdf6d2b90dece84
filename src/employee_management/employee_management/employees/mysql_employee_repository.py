from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Employee, EmployeeDetails, EmployeeSummary
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = """
    e.employee_id, e.account_id, e.employee_code, e.dob, e.gender, e.marital_status,
    e.designation, e.department_id, e.salary, e.status
"""

_DETAILS_QUERY = f"""
    SELECT {_EMPLOYEE_COLUMNS},
           a.name, a.email, a.role, a.profile_image,
           d.dept_name
    FROM employees e
    JOIN accounts a ON a.account_id = e.account_id
    LEFT JOIN departments d ON d.dept_id = e.department_id
"""


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        account_id=int(r["account_id"]),
        employee_code=r.get("employee_code"),
        dob=r.get("dob"),
        gender=r.get("gender"),
        marital_status=r.get("marital_status"),
        designation=r.get("designation"),
        department_id=r.get("department_id"),
        salary=to_decimal(r.get("salary")),
        status=EmployeeStatus(r["status"]),
    )


def _row_to_details(r: dict) -> EmployeeDetails:
    return EmployeeDetails(
        employee=_row_to_employee(r),
        name=r["name"],
        email=r["email"],
        role=Role(r["role"]),
        profile_image=r.get("profile_image"),
        department_name=r.get("dept_name"),
    )


def _is_duplicate_key(exc: mysql.connector.IntegrityError) -> bool:
    return exc.errno == errorcode.ER_DUP_ENTRY


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_with_account(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        profile_image: Optional[str],
        employee_code: Optional[str],
        dob: Optional[date],
        gender: Optional[str],
        marital_status: Optional[str],
        designation: Optional[str],
        department_id: int,
        salary: Optional[Decimal],
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO accounts(name, email, password_hash, role, profile_image)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (name, email.strip().lower(), password_hash, role.value, profile_image),
                )
                account_id = int(cur.lastrowid)
                cur.execute(
                    """
                    INSERT INTO employees(
                        account_id, employee_code, dob, gender, marital_status,
                        designation, department_id, salary, status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        account_id,
                        employee_code,
                        dob,
                        gender,
                        marital_status,
                        designation,
                        int(department_id),
                        salary,
                        EmployeeStatus.ACTIVE.value,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if _is_duplicate_key(exc):
                raise ConflictError("User already registered") from exc
            raise

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees e WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_account_id(self, account_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees e WHERE e.account_id=%s", (int(account_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_details(self, employee_id: int) -> Optional[EmployeeDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_DETAILS_QUERY + " WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_details(r) if r else None

    def list_details(self, *, exclude_status: Optional[EmployeeStatus] = None) -> Sequence[EmployeeDetails]:
        sql = _DETAILS_QUERY
        params: tuple = ()
        if exclude_status is not None:
            sql += " WHERE e.status<>%s"
            params = (exclude_status.value,)
        sql += " ORDER BY e.employee_code"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_details(r) for r in fetchall(cur)]

    def update_with_account(
        self,
        employee_id: int,
        *,
        name: str,
        email: str,
        role: Optional[Role] = None,
        password_hash: Optional[str] = None,
        profile_image: Optional[str] = None,
        employee_code: Optional[str],
        dob: Optional[date],
        gender: Optional[str],
        marital_status: Optional[str],
        designation: Optional[str],
        department_id: Optional[int],
        salary: Optional[Decimal],
        status: EmployeeStatus,
    ) -> bool:
        sets = ["name=%s", "email=%s"]
        params: list[object] = [name, email.strip().lower()]
        if role is not None:
            sets.append("role=%s")
            params.append(role.value)
        if password_hash is not None:
            sets.append("password_hash=%s")
            params.append(password_hash)
        if profile_image is not None:
            sets.append("profile_image=%s")
            params.append(profile_image)

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT account_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
                r = fetchone(cur)
                if not r:
                    return False
                cur.execute(
                    f"UPDATE accounts SET {', '.join(sets)}, updated_at=CURRENT_TIMESTAMP WHERE account_id=%s",
                    tuple(params + [int(r["account_id"])]),
                )
                cur.execute(
                    """
                    UPDATE employees
                    SET employee_code=%s, dob=%s, gender=%s, marital_status=%s, designation=%s,
                        department_id=%s, salary=%s, status=%s, updated_at=CURRENT_TIMESTAMP
                    WHERE employee_id=%s
                    """,
                    (
                        employee_code,
                        dob,
                        gender,
                        marital_status,
                        designation,
                        department_id,
                        salary,
                        status.value,
                        int(employee_id),
                    ),
                )
                return True
        except mysql.connector.IntegrityError as exc:
            if _is_duplicate_key(exc):
                raise ConflictError("Email already in use") from exc
            raise

    def delete_cascade(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT account_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
            r = fetchone(cur)
            if not r:
                return False
            account_id = int(r["account_id"])
            cur.execute("DELETE FROM leave_requests WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM salary_records WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM attendance_records WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM accounts WHERE account_id=%s", (account_id,))
            return True


# Shared by the leave/salary/attendance repositories to join the owning employee.
EMPLOYEE_SUMMARY_COLUMNS = """
    e.employee_id AS emp_employee_id, e.account_id AS emp_account_id, e.employee_code AS emp_code,
    e.status AS emp_status, a.name AS emp_name, a.email AS emp_email,
    a.profile_image AS emp_profile_image, d.dept_name AS emp_dept_name
"""

EMPLOYEE_SUMMARY_JOINS = """
    JOIN employees e ON e.employee_id = {alias}.employee_id
    JOIN accounts a ON a.account_id = e.account_id
    LEFT JOIN departments d ON d.dept_id = e.department_id
"""


def row_to_summary(r: dict) -> EmployeeSummary:
    return EmployeeSummary(
        employee_id=int(r["emp_employee_id"]),
        account_id=int(r["emp_account_id"]),
        employee_code=r.get("emp_code"),
        name=r["emp_name"],
        email=r["emp_email"],
        profile_image=r.get("emp_profile_image"),
        department_name=r.get("emp_dept_name"),
        status=EmployeeStatus(r["emp_status"]),
    )
