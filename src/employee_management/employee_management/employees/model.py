from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import iso_or_none
from ..core.enums import EmployeeStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: business record of a staff member, owned by exactly one Account."""

    employee_id: int
    account_id: int
    employee_code: Optional[str]
    dob: Optional[date]
    gender: Optional[str]
    marital_status: Optional[str]
    designation: Optional[str]
    department_id: Optional[int]
    salary: Optional[Decimal]
    status: EmployeeStatus = EmployeeStatus.ACTIVE


@dataclass(frozen=True)
class EmployeeSummary:
    """Identity columns joined onto leave/salary/attendance listings."""

    employee_id: int
    account_id: int
    employee_code: Optional[str]
    name: str
    email: str
    profile_image: Optional[str]
    department_name: Optional[str]
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "userId": self.account_id,
            "employeeId": self.employee_code,
            "name": self.name,
            "email": self.email,
            "profileImage": self.profile_image,
            "department": self.department_name,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class EmployeeDetails:
    """Read model: employee joined with its account and department."""

    employee: Employee
    name: str
    email: str
    role: Role
    profile_image: Optional[str]
    department_name: Optional[str]

    def to_dict(self) -> dict:
        e = self.employee
        return {
            "id": e.employee_id,
            "employeeId": e.employee_code,
            "dob": iso_or_none(e.dob),
            "gender": e.gender,
            "maritalStatus": e.marital_status,
            "designation": e.designation,
            "salary": float(e.salary) if e.salary is not None else None,
            "status": e.status.value,
            "user": {
                "id": e.account_id,
                "name": self.name,
                "email": self.email,
                "role": self.role.value,
                "profileImage": self.profile_image,
            },
            "department": {"id": e.department_id, "name": self.department_name},
        }
