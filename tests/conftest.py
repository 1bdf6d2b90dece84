from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.employee_management.employee_management.attendance.model import AttendanceDetails, AttendanceRecord
from src.employee_management.employee_management.auth.model import Caller
from src.employee_management.employee_management.auth.tokens import TokenService
from src.employee_management.employee_management.container import assemble_container
from src.employee_management.employee_management.core.enums import LeaveStatus, Role
from src.employee_management.employee_management.core.exceptions import ConflictError
from src.employee_management.employee_management.departments.model import Department
from src.employee_management.employee_management.employees.model import Employee, EmployeeDetails, EmployeeSummary
from src.employee_management.employee_management.leaves.model import LeaveDetails, LeaveRequest
from src.employee_management.employee_management.main import create_app
from src.employee_management.employee_management.salaries.model import SalaryDetails, SalaryRecord
from src.employee_management.employee_management.users.model import Account

JWT_SECRET = "test-jwt-secret"


class Store:
    """Tables shared by the fake repositories so joins and cascades behave like MySQL."""

    def __init__(self):
        self.accounts: dict[int, Account] = {}
        self.departments: dict[int, Department] = {}
        self.employees: dict[int, Employee] = {}
        self.leaves: dict[int, LeaveRequest] = {}
        self.salaries: dict[int, SalaryRecord] = {}
        self.attendance: dict[int, AttendanceRecord] = {}
        self._ids: dict[str, int] = {}

    def next_id(self, table: str) -> int:
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]

    def summary(self, employee_id: int) -> EmployeeSummary:
        e = self.employees[employee_id]
        a = self.accounts[e.account_id]
        dept = self.departments.get(e.department_id) if e.department_id else None
        return EmployeeSummary(
            employee_id=e.employee_id,
            account_id=a.account_id,
            employee_code=e.employee_code,
            name=a.name,
            email=a.email,
            profile_image=a.profile_image,
            department_name=dept.dept_name if dept else None,
            status=e.status,
        )


class FakeAccounts:
    def __init__(self, store: Store):
        self._s = store

    def get_by_id(self, account_id: int) -> Optional[Account]:
        return self._s.accounts.get(int(account_id))

    def get_by_email(self, email: str) -> Optional[Account]:
        for a in self._s.accounts.values():
            if a.email == email.lower():
                return a
        return None

    def create(self, *, name, email, password_hash, role, profile_image=None) -> int:
        aid = self._s.next_id("accounts")
        self._s.accounts[aid] = Account(aid, name, email.lower(), password_hash, role, profile_image)
        return aid

    def update_password(self, account_id: int, *, password_hash: str) -> bool:
        a = self._s.accounts.get(int(account_id))
        if not a:
            return False
        self._s.accounts[a.account_id] = replace(a, password_hash=password_hash)
        return True


class FakeDepartments:
    def __init__(self, store: Store):
        self._s = store

    def list_all(self):
        return sorted(self._s.departments.values(), key=lambda d: d.dept_name)

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        return self._s.departments.get(int(dept_id))

    def create(self, *, dept_name, description) -> int:
        did = self._s.next_id("departments")
        self._s.departments[did] = Department(did, dept_name, description)
        return did

    def update(self, dept_id, *, dept_name, description) -> bool:
        if int(dept_id) not in self._s.departments:
            return False
        self._s.departments[int(dept_id)] = Department(int(dept_id), dept_name, description)
        return True

    def delete(self, dept_id) -> bool:
        return self._s.departments.pop(int(dept_id), None) is not None

    def count_employees(self, dept_id) -> int:
        return sum(1 for e in self._s.employees.values() if e.department_id == int(dept_id))


class FakeEmployees:
    def __init__(self, store: Store):
        self._s = store

    def create_with_account(
        self,
        *,
        name,
        email,
        password_hash,
        role,
        profile_image,
        employee_code,
        dob,
        gender,
        marital_status,
        designation,
        department_id,
        salary,
    ) -> int:
        if FakeAccounts(self._s).get_by_email(email):
            raise ConflictError("User already registered")
        aid = FakeAccounts(self._s).create(
            name=name, email=email, password_hash=password_hash, role=role, profile_image=profile_image
        )
        eid = self._s.next_id("employees")
        self._s.employees[eid] = Employee(
            employee_id=eid,
            account_id=aid,
            employee_code=employee_code,
            dob=dob,
            gender=gender,
            marital_status=marital_status,
            designation=designation,
            department_id=department_id,
            salary=salary,
        )
        return eid

    def get_by_id(self, employee_id) -> Optional[Employee]:
        return self._s.employees.get(int(employee_id))

    def get_by_account_id(self, account_id) -> Optional[Employee]:
        for e in self._s.employees.values():
            if e.account_id == int(account_id):
                return e
        return None

    def get_details(self, employee_id) -> Optional[EmployeeDetails]:
        e = self._s.employees.get(int(employee_id))
        if not e:
            return None
        a = self._s.accounts[e.account_id]
        dept = self._s.departments.get(e.department_id) if e.department_id else None
        return EmployeeDetails(e, a.name, a.email, a.role, a.profile_image, dept.dept_name if dept else None)

    def list_details(self, *, exclude_status=None):
        return [
            self.get_details(eid)
            for eid, e in sorted(self._s.employees.items())
            if exclude_status is None or e.status != exclude_status
        ]

    def update_with_account(
        self,
        employee_id,
        *,
        name,
        email,
        role=None,
        password_hash=None,
        profile_image=None,
        **employee_fields,
    ) -> bool:
        e = self._s.employees.get(int(employee_id))
        if not e:
            return False
        taken = FakeAccounts(self._s).get_by_email(email)
        if taken and taken.account_id != e.account_id:
            raise ConflictError("Email already in use")
        a = self._s.accounts[e.account_id]
        self._s.accounts[a.account_id] = replace(
            a,
            name=name,
            email=email.lower(),
            role=role or a.role,
            password_hash=password_hash or a.password_hash,
            profile_image=profile_image or a.profile_image,
        )
        self._s.employees[e.employee_id] = replace(e, **employee_fields)
        return True

    def set_status(self, employee_id, status) -> None:
        e = self._s.employees[int(employee_id)]
        self._s.employees[e.employee_id] = replace(e, status=status)

    def delete_cascade(self, employee_id) -> bool:
        e = self._s.employees.get(int(employee_id))
        if not e:
            return False
        for table in (self._s.leaves, self._s.salaries, self._s.attendance):
            for rid in [rid for rid, r in table.items() if r.employee_id == e.employee_id]:
                del table[rid]
        del self._s.employees[e.employee_id]
        self._s.accounts.pop(e.account_id, None)
        return True


class FakeLeaves:
    def __init__(self, store: Store):
        self._s = store

    def create(self, *, employee_id, leave_type, from_date, to_date, description, applied_date) -> int:
        lid = self._s.next_id("leaves")
        self._s.leaves[lid] = LeaveRequest(
            lid, employee_id, leave_type, from_date, to_date, description, LeaveStatus.PENDING, applied_date
        )
        return lid

    def get_by_id(self, leave_id) -> Optional[LeaveRequest]:
        return self._s.leaves.get(int(leave_id))

    def get_details(self, leave_id) -> Optional[LeaveDetails]:
        leave = self._s.leaves.get(int(leave_id))
        if not leave:
            return None
        return LeaveDetails(leave, self._s.summary(leave.employee_id))

    def list_details(self, *, employee_id=None):
        items = [l for l in self._s.leaves.values() if employee_id is None or l.employee_id == employee_id]
        items.sort(key=lambda l: l.applied_date, reverse=True)
        return [LeaveDetails(l, self._s.summary(l.employee_id)) for l in items]

    def decide(self, *, leave_id, status, approved_by, approved_date) -> bool:
        leave = self._s.leaves.get(int(leave_id))
        if not leave or leave.status != LeaveStatus.PENDING:
            return False
        self._s.leaves[leave.leave_id] = replace(
            leave, status=status, approved_by=approved_by, approved_date=approved_date
        )
        return True

    def delete(self, leave_id) -> bool:
        return self._s.leaves.pop(int(leave_id), None) is not None


class FakeSalaries:
    def __init__(self, store: Store):
        self._s = store

    def create(self, *, employee_id, basic_salary, allowances, deductions, net_salary, pay_date) -> int:
        sid = self._s.next_id("salaries")
        self._s.salaries[sid] = SalaryRecord(
            sid, employee_id, basic_salary, allowances, deductions, net_salary, pay_date
        )
        return sid

    def get_by_id(self, salary_id) -> Optional[SalaryRecord]:
        return self._s.salaries.get(int(salary_id))

    def get_details(self, salary_id) -> Optional[SalaryDetails]:
        rec = self._s.salaries.get(int(salary_id))
        if not rec:
            return None
        return SalaryDetails(rec, self._s.summary(rec.employee_id))

    def list_details(self, *, employee_id=None, exclude_employee_status=None):
        items = []
        for rec in self._s.salaries.values():
            if employee_id is not None and rec.employee_id != employee_id:
                continue
            if exclude_employee_status and self._s.employees[rec.employee_id].status == exclude_employee_status:
                continue
            items.append(rec)
        items.sort(key=lambda r: r.pay_date, reverse=True)
        return [SalaryDetails(r, self._s.summary(r.employee_id)) for r in items]

    def update(self, salary_id, **fields) -> bool:
        rec = self._s.salaries.get(int(salary_id))
        if not rec:
            return False
        self._s.salaries[rec.salary_id] = replace(rec, **fields)
        return True

    def delete(self, salary_id) -> bool:
        return self._s.salaries.pop(int(salary_id), None) is not None


class FakeAttendance:
    def __init__(self, store: Store):
        self._s = store

    def get_for_employee_and_date(self, employee_id, work_date) -> Optional[AttendanceRecord]:
        for r in self._s.attendance.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def create(self, *, employee_id, work_date, status) -> int:
        # unique (employee_id, work_date): an existing row is overwritten
        for existing in self._s.attendance.values():
            if existing.employee_id == employee_id and existing.work_date == work_date:
                self._s.attendance[existing.attendance_id] = replace(existing, status=status)
                return existing.attendance_id
        rid = self._s.next_id("attendance")
        self._s.attendance[rid] = AttendanceRecord(rid, employee_id, work_date, status)
        return rid

    def update_status(self, *, attendance_id, status) -> bool:
        rec = self._s.attendance.get(int(attendance_id))
        if not rec:
            return False
        self._s.attendance[rec.attendance_id] = replace(rec, status=status)
        return True

    def list_range(self, *, start_date, end_date, employee_id=None):
        items = [
            r
            for r in self._s.attendance.values()
            if start_date <= r.work_date <= end_date and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: (r.work_date, r.employee_id))
        return [AttendanceDetails(r, self._s.summary(r.employee_id)) for r in items]

    def list_for_date(self, work_date):
        items = [r for r in self._s.attendance.values() if r.work_date == work_date]
        items.sort(key=lambda r: self._s.employees[r.employee_id].employee_code or "")
        return [AttendanceDetails(r, self._s.summary(r.employee_id)) for r in items]


class World:
    """Fake repositories plus a few seeded rows: an admin account, a department, an employee."""

    def __init__(self):
        self.store = Store()
        self.accounts = FakeAccounts(self.store)
        self.departments = FakeDepartments(self.store)
        self.employees = FakeEmployees(self.store)
        self.leaves = FakeLeaves(self.store)
        self.salaries = FakeSalaries(self.store)
        self.attendance = FakeAttendance(self.store)
        self.tokens = TokenService(JWT_SECRET)

        self.admin_account_id = self.accounts.create(
            name="admin",
            email="admin@gmail.com",
            password_hash=generate_password_hash("admin"),
            role=Role.ADMIN,
        )
        self.dept_id = self.departments.create(dept_name="Engineering", description="Builds things")

    def add_employee(self, name: str = "Bob", email: str = "bob@example.com", password: str = "secret1", code: str = "E001") -> Employee:
        eid = self.employees.create_with_account(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
            profile_image=None,
            employee_code=code,
            dob=date(1990, 5, 1),
            gender="male",
            marital_status="single",
            designation="Developer",
            department_id=self.dept_id,
            salary=Decimal("50000"),
        )
        return self.employees.get_by_id(eid)

    @property
    def admin(self) -> Caller:
        return Caller(account_id=self.admin_account_id, role=Role.ADMIN, name="admin")

    def caller_for(self, employee: Employee) -> Caller:
        account = self.accounts.get_by_id(employee.account_id)
        return Caller(account_id=account.account_id, role=account.role, name=account.name)

    def token_for(self, account_id: int) -> str:
        account = self.accounts.get_by_id(account_id)
        return self.tokens.issue(account_id=account.account_id, role=account.role)

    def container(self, **kwargs):
        return assemble_container(
            accounts=self.accounts,
            departments=self.departments,
            employees=self.employees,
            leaves=self.leaves,
            salaries=self.salaries,
            attendance=self.attendance,
            tokens=self.tokens,
            **kwargs,
        )


@pytest.fixture
def world() -> World:
    return World()


@pytest.fixture
def container(world):
    return world.container()


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(world):
    return {"Authorization": f"Bearer {world.token_for(world.admin_account_id)}"}


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 2, 9, 0, 0)

