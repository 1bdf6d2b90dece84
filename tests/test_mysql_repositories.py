from __future__ import annotations

from datetime import date
from decimal import Decimal

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.employee_management.employee_management.attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
)
from src.employee_management.employee_management.core.enums import AttendanceStatus, EmployeeStatus, Role
from src.employee_management.employee_management.core.exceptions import ConflictError
from src.employee_management.employee_management.employees.mysql_employee_repository import (
    MySQLEmployeeRepository,
)


class ScriptedCursor:
    """Records statements; raises ``fail_with`` on the statement containing ``fail_on``."""

    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = None
        self.rowcount = 0

    def execute(self, sql, params=()):
        self._conn.statements.append((" ".join(sql.split()), params))
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise self._conn.fail_with
        self.lastrowid = self._conn.lastrowid
        self.rowcount = 1

    def fetchone(self):
        return self._conn.rows.pop(0) if self._conn.rows else None

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, *, rows=None, lastrowid=1, fail_on=None, fail_with=None):
        self.rows = list(rows or [])
        self.lastrowid = lastrowid
        self.fail_on = fail_on
        self.fail_with = fail_with
        self.statements = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, **kwargs):
        return ScriptedCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class ScriptedFactory:
    def __init__(self, conn: ScriptedConnection):
        self.conn = conn

    def connect(self):
        return self.conn


def _duplicate_entry():
    return mysql.connector.IntegrityError(msg="Duplicate entry for key 'email'", errno=errorcode.ER_DUP_ENTRY)


def _new_employee(repo):
    return repo.create_with_account(
        name="Bob",
        email="Bob@Example.com",
        password_hash="hash",
        role=Role.EMPLOYEE,
        profile_image=None,
        employee_code="E001",
        dob=date(1990, 5, 1),
        gender="male",
        marital_status="single",
        designation="Developer",
        department_id=1,
        salary=Decimal("50000"),
    )


def test_concurrent_registration_of_same_email_is_a_conflict():
    conn = ScriptedConnection(fail_on="INSERT INTO accounts", fail_with=_duplicate_entry())

    with pytest.raises(ConflictError, match="User already registered"):
        _new_employee(MySQLEmployeeRepository(ScriptedFactory(conn)))

    assert conn.rolled_back and not conn.committed


def test_other_integrity_errors_propagate():
    failure = mysql.connector.IntegrityError(msg="foreign key", errno=errorcode.ER_NO_REFERENCED_ROW_2)
    conn = ScriptedConnection(fail_on="INSERT INTO employees", fail_with=failure)

    with pytest.raises(mysql.connector.IntegrityError):
        _new_employee(MySQLEmployeeRepository(ScriptedFactory(conn)))
    assert conn.rolled_back


def _update(repo, employee_id=7, email="bob@example.com"):
    return repo.update_with_account(
        employee_id,
        name="Robert",
        email=email,
        profile_image="1700000000000.png",
        employee_code="E001",
        dob=None,
        gender=None,
        marital_status=None,
        designation="Lead",
        department_id=1,
        salary=Decimal("60000"),
        status=EmployeeStatus.ACTIVE,
    )


def test_update_writes_account_and_employee_in_one_transaction():
    conn = ScriptedConnection(rows=[{"account_id": 3}])

    assert _update(MySQLEmployeeRepository(ScriptedFactory(conn))) is True

    sqls = [sql for sql, _ in conn.statements]
    assert sqls[0].startswith("SELECT account_id FROM employees") and sqls[0].endswith("FOR UPDATE")
    assert sqls[1].startswith("UPDATE accounts SET name=%s, email=%s, profile_image=%s")
    assert conn.statements[1][1] == ("Robert", "bob@example.com", "1700000000000.png", 3)
    assert sqls[2].startswith("UPDATE employees")
    assert conn.committed


def test_update_of_missing_employee_writes_nothing():
    conn = ScriptedConnection(rows=[])

    assert _update(MySQLEmployeeRepository(ScriptedFactory(conn))) is False
    assert len(conn.statements) == 1


def test_update_to_taken_email_rolls_back_both_rows():
    conn = ScriptedConnection(rows=[{"account_id": 3}], fail_on="UPDATE accounts", fail_with=_duplicate_entry())

    with pytest.raises(ConflictError, match="Email already in use"):
        _update(MySQLEmployeeRepository(ScriptedFactory(conn)), email="ann@example.com")

    assert not any(sql.startswith("UPDATE employees") for sql, _ in conn.statements)
    assert conn.rolled_back and not conn.committed


def test_attendance_create_overwrites_existing_day():
    conn = ScriptedConnection(lastrowid=42)

    attendance_id = MySQLAttendanceRepository(ScriptedFactory(conn)).create(
        employee_id=5, work_date=date(2026, 3, 2), status=AttendanceStatus.ABSENT
    )

    sql, params = conn.statements[0]
    assert attendance_id == 42
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert "attendance_id=LAST_INSERT_ID(attendance_id)" in sql
    assert params == (5, date(2026, 3, 2), "absent")
