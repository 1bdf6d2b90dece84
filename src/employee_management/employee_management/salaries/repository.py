from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import SalaryDetails, SalaryRecord


class SalaryRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def get_details(self, salary_id: int) -> Optional[SalaryDetails]:
        raise NotImplementedError

    def list_details(
        self,
        *,
        employee_id: Optional[int] = None,
        exclude_employee_status: Optional[EmployeeStatus] = None,
    ) -> Sequence[SalaryDetails]:
        """Latest pay date first."""

        raise NotImplementedError

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
        raise NotImplementedError

    def delete(self, salary_id: int) -> bool:
        raise NotImplementedError
