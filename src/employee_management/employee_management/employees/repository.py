from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus, Role
from .model import Employee, EmployeeDetails


class EmployeeRepository(Protocol):
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
        """Insert the account and its employee row together; returns the employee id.

        Raises ConflictError when the email is already registered.
        """

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_account_id(self, account_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_details(self, employee_id: int) -> Optional[EmployeeDetails]:
        raise NotImplementedError

    def list_details(self, *, exclude_status: Optional[EmployeeStatus] = None) -> Sequence[EmployeeDetails]:
        raise NotImplementedError

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
        """Write the employee row and its account (name, email; role, hash and image only when given) together.

        Raises ConflictError when the email belongs to another account.
        """

        raise NotImplementedError

    def delete_cascade(self, employee_id: int) -> bool:
        """Remove leaves, salaries and attendance of the employee, then the employee, then its account."""

        raise NotImplementedError
