from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.gate import AccessGate
from .auth.service import AuthService
from .auth.tokens import TokenService
from .core.constants import DEFAULT_TOKEN_EXPIRE_DAYS
from .database.connection import DatabaseConnection, db_config_from_dict
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .employees.uploads import ProfileImageStore
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .salaries.mysql_salary_repository import MySQLSalaryRepository
from .salaries.repository import SalaryRepository
from .salaries.service import SalaryService
from .users.mysql_account_repository import MySQLAccountRepository
from .users.repository import AccountRepository


@dataclass(frozen=True)
class Container:
    accounts_repo: AccountRepository
    departments_repo: DepartmentRepository
    employees_repo: EmployeeRepository
    leaves_repo: LeaveRepository
    salaries_repo: SalaryRepository
    attendance_repo: AttendanceRepository

    tokens: TokenService
    gate: AccessGate
    images: Optional[ProfileImageStore]

    auth_service: AuthService
    department_service: DepartmentService
    employee_service: EmployeeService
    leave_service: LeaveService
    salary_service: SalaryService
    attendance_service: AttendanceService

    conn: Optional[DatabaseConnection] = None


def assemble_container(
    *,
    accounts: AccountRepository,
    departments: DepartmentRepository,
    employees: EmployeeRepository,
    leaves: LeaveRepository,
    salaries: SalaryRepository,
    attendance: AttendanceRepository,
    tokens: TokenService,
    images: Optional[ProfileImageStore] = None,
    distinct_login_errors: bool = True,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of already-built repositories (MySQL in production, fakes in tests)."""
    return Container(
        accounts_repo=accounts,
        departments_repo=departments,
        employees_repo=employees,
        leaves_repo=leaves,
        salaries_repo=salaries,
        attendance_repo=attendance,
        tokens=tokens,
        gate=AccessGate(tokens, accounts),
        images=images,
        auth_service=AuthService(accounts, tokens, distinct_login_errors=distinct_login_errors),
        department_service=DepartmentService(departments),
        employee_service=EmployeeService(employees, accounts, departments, images),
        leave_service=LeaveService(leaves, employees),
        salary_service=SalaryService(salaries, employees),
        attendance_service=AttendanceService(attendance, employees),
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(db_config_from_dict(db_config))

    tokens = TokenService(
        str(getattr(settings, "JWT_SECRET_KEY")),
        algorithm=str(getattr(settings, "JWT_ALGORITHM", "HS256")),
        expire_days=int(getattr(settings, "TOKEN_EXPIRE_DAYS", DEFAULT_TOKEN_EXPIRE_DAYS)),
    )
    upload_folder = getattr(settings, "UPLOAD_FOLDER", None)

    return assemble_container(
        accounts=MySQLAccountRepository(conn),
        departments=MySQLDepartmentRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        salaries=MySQLSalaryRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        tokens=tokens,
        images=ProfileImageStore(upload_folder) if upload_folder else None,
        distinct_login_errors=bool(getattr(settings, "DISTINCT_LOGIN_ERRORS", True)),
        conn=conn,
    )
