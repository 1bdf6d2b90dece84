from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from werkzeug.datastructures import FileStorage
from werkzeug.security import generate_password_hash

from ..auth.gate import require_admin
from ..auth.model import Caller
from ..common.datetime_utils import parse_optional_date
from ..common.validators import is_blank, parse_amount, require_non_empty
from ..core.constants import DEFAULT_PROFILE_IMAGE
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..users.repository import AccountRepository
from .model import EmployeeDetails
from .repository import EmployeeRepository
from .uploads import ProfileImageStore

logger = logging.getLogger(__name__)


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_role(value: Any) -> Role:
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Invalid role")


def _parse_status(value: Any) -> EmployeeStatus:
    try:
        return EmployeeStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Invalid employee status")


def _parse_id(value: Any, message: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(message)


class EmployeeService:
    """Use case: org directory (employees and their accounts)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        accounts: AccountRepository,
        departments: DepartmentRepository,
        images: Optional[ProfileImageStore] = None,
    ):
        self._employees = employees
        self._accounts = accounts
        self._departments = departments
        self._images = images

    def _require_department(self, value: Any) -> int:
        if is_blank(value):
            raise ValidationError("Department is required")
        dept_id = _parse_id(value, "Invalid department")
        if not self._departments.get_by_id(dept_id):
            raise NotFoundError("Department not found")
        return dept_id

    def _save_image(self, image: Optional[FileStorage]) -> Optional[str]:
        if image is None or self._images is None:
            return None
        return self._images.save(image)

    def _discard_image(self, filename: Optional[str]) -> None:
        if filename and self._images is not None:
            self._images.discard(filename)

    def add_employee(self, *, caller: Caller, data: Mapping[str, Any], image: Optional[FileStorage] = None) -> EmployeeDetails:
        require_admin(caller)

        dept_id = self._require_department(data.get("department"))
        name = require_non_empty(data.get("name"), "Name is required")
        email = require_non_empty(data.get("email"), "Email is required").lower()
        password = require_non_empty(data.get("password"), "Password is required")
        role = _parse_role(data.get("role") or Role.EMPLOYEE.value)
        dob = parse_optional_date(data.get("dob"), "Invalid date of birth")
        salary = None if is_blank(data.get("salary")) else parse_amount(data.get("salary"), "salary")

        if self._accounts.get_by_email(email):
            raise ConflictError("User already registered")

        saved_image = self._save_image(image)
        try:
            employee_id = self._employees.create_with_account(
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=role,
                profile_image=saved_image or DEFAULT_PROFILE_IMAGE,
                employee_code=_clean(data.get("employeeId")),
                dob=dob,
                gender=_clean(data.get("gender")),
                marital_status=_clean(data.get("maritalStatus")),
                designation=_clean(data.get("designation")),
                department_id=dept_id,
                salary=salary,
            )
        except Exception:
            self._discard_image(saved_image)
            raise
        logger.info("employee %s created for %s by account %s", employee_id, email, caller.account_id)
        return self._details_or_404(employee_id)

    def list_employees(self, *, caller: Caller) -> Sequence[EmployeeDetails]:
        require_admin(caller)
        return self._employees.list_details(exclude_status=EmployeeStatus.RESIGNED)

    def get_employee(self, *, caller: Caller, employee_id: int) -> EmployeeDetails:
        if not caller.is_admin:
            own = self._employees.get_by_account_id(caller.account_id)
            if not own or own.employee_id != int(employee_id):
                raise AuthorizationError("Access denied. You can only view your own profile.")
        return self._details_or_404(employee_id)

    def update_employee(
        self,
        *,
        caller: Caller,
        employee_id: Optional[int],
        data: Mapping[str, Any],
        image: Optional[FileStorage] = None,
    ) -> EmployeeDetails:
        """Update an employee; ``employee_id=None`` means the caller's own profile.

        Admin-only fields (code, designation, department, salary, status, role, password)
        are applied only when an admin updates a record by id.
        """
        if employee_id is None:
            employee = self._employees.get_by_account_id(caller.account_id)
            if not employee:
                raise NotFoundError("Employee record not found")
            admin_update = False
        else:
            employee = self._employees.get_by_id(int(employee_id))
            if not employee:
                raise NotFoundError("Employee not found")
            if not caller.is_admin and employee.account_id != caller.account_id:
                raise AuthorizationError("Access denied. You can only update your own profile.")
            admin_update = caller.is_admin

        dept_id = employee.department_id
        if admin_update:
            dept_id = self._require_department(data.get("department"))

        name = require_non_empty(data.get("name"), "Name is required")
        email = require_non_empty(data.get("email"), "Email is required").lower()
        dob = parse_optional_date(data.get("dob"), "Invalid date of birth")

        existing = self._accounts.get_by_email(email)
        if existing and existing.account_id != employee.account_id:
            raise ConflictError("Email already in use")

        role = None
        password_hash = None
        if admin_update:
            if not is_blank(data.get("role")):
                role = _parse_role(data.get("role"))
            if not is_blank(data.get("password")):
                password_hash = generate_password_hash(str(data.get("password")))

        employee_code = employee.employee_code
        designation = employee.designation
        salary = employee.salary
        status = employee.status
        if admin_update:
            employee_code = _clean(data.get("employeeId")) or employee_code
            designation = _clean(data.get("designation")) or designation
            if not is_blank(data.get("salary")):
                salary = parse_amount(data.get("salary"), "salary")
            if not is_blank(data.get("status")):
                status = _parse_status(data.get("status"))

        saved_image = self._save_image(image)
        try:
            self._employees.update_with_account(
                employee.employee_id,
                name=name,
                email=email,
                role=role,
                password_hash=password_hash,
                profile_image=saved_image,
                employee_code=employee_code,
                dob=dob or employee.dob,
                gender=_clean(data.get("gender")) or employee.gender,
                marital_status=_clean(data.get("maritalStatus")) or employee.marital_status,
                designation=designation,
                department_id=dept_id,
                salary=salary,
                status=status,
            )
        except Exception:
            self._discard_image(saved_image)
            raise
        logger.info("employee %s updated by account %s", employee.employee_id, caller.account_id)
        return self._details_or_404(employee.employee_id)

    def delete_employee(self, *, caller: Caller, employee_id: int) -> None:
        require_admin(caller)
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")
        self._employees.delete_cascade(int(employee_id))
        logger.info("employee %s and related records deleted by account %s", employee_id, caller.account_id)

    def _details_or_404(self, employee_id: int) -> EmployeeDetails:
        details = self._employees.get_details(int(employee_id))
        if not details:
            raise NotFoundError("Employee not found")
        return details
