from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..auth.gate import require_admin, require_self_or_admin
from ..auth.model import Caller
from ..common.datetime_utils import parse_date_field
from ..common.validators import is_blank, parse_amount
from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import SalaryDetails
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


class SalaryService:
    """Salary ledger. netSalary is always derived here, never taken from the client."""

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._salaries = salaries
        self._employees = employees
        self._calculator = calculator or StandardSalaryCalculator()

    def _amounts(self, basic_salary: Any, allowances: Any, deductions: Any) -> dict:
        basic = parse_amount(basic_salary, "basic salary")
        allow = parse_amount(allowances, "allowances", default=_ZERO)
        deduct = parse_amount(deductions, "deductions", default=_ZERO)
        return {
            "basic_salary": basic,
            "allowances": allow,
            "deductions": deduct,
            "net_salary": self._calculator.net_salary(basic_salary=basic, allowances=allow, deductions=deduct),
        }

    def add_salary(
        self,
        *,
        caller: Caller,
        employee_id: Any,
        basic_salary: Any,
        allowances: Any = None,
        deductions: Any = None,
        pay_date: Any,
    ) -> SalaryDetails:
        require_admin(caller)
        if is_blank(employee_id) or is_blank(basic_salary) or is_blank(pay_date):
            raise ValidationError("Employee ID, basic salary, and pay date are required")

        try:
            emp_id = int(str(employee_id).strip())
        except ValueError:
            raise ValidationError("Invalid employee ID")
        if not self._employees.get_by_id(emp_id):
            raise NotFoundError("Employee not found")

        amounts = self._amounts(basic_salary, allowances, deductions)
        salary_id = self._salaries.create(
            employee_id=emp_id,
            pay_date=parse_date_field(pay_date, "Invalid pay date"),
            **amounts,
        )
        logger.info("salary %s added for employee %s (net %s)", salary_id, emp_id, amounts["net_salary"])
        return self._details_or_404(salary_id)

    def update_salary(
        self,
        *,
        caller: Caller,
        salary_id: int,
        basic_salary: Any,
        allowances: Any = None,
        deductions: Any = None,
        pay_date: Any,
    ) -> SalaryDetails:
        require_admin(caller)
        if is_blank(basic_salary) or is_blank(pay_date):
            raise ValidationError("Basic salary and pay date are required")

        amounts = self._amounts(basic_salary, allowances, deductions)
        parsed_pay_date = parse_date_field(pay_date, "Invalid pay date")
        if not self._salaries.get_by_id(int(salary_id)):
            raise NotFoundError("Salary record not found")

        self._salaries.update(int(salary_id), pay_date=parsed_pay_date, **amounts)
        logger.info("salary %s updated (net %s)", salary_id, amounts["net_salary"])
        return self._details_or_404(salary_id)

    def list_salaries(self, *, caller: Caller) -> Sequence[SalaryDetails]:
        require_admin(caller)
        return self._salaries.list_details(exclude_employee_status=EmployeeStatus.RESIGNED)

    def get_salary(self, *, caller: Caller, salary_id: int) -> SalaryDetails:
        require_admin(caller)
        return self._details_or_404(salary_id)

    def delete_salary(self, *, caller: Caller, salary_id: int) -> None:
        require_admin(caller)
        if not self._salaries.delete(int(salary_id)):
            raise NotFoundError("Salary record not found")
        logger.info("salary %s deleted by account %s", salary_id, caller.account_id)

    def list_for_employee(self, *, caller: Caller, employee_id: int) -> Sequence[SalaryDetails]:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        require_self_or_admin(caller, employee.account_id, "Access denied. You can only view your own salary history.")
        return self._salaries.list_details(employee_id=employee.employee_id)

    def _details_or_404(self, salary_id: int) -> SalaryDetails:
        details = self._salaries.get_details(int(salary_id))
        if not details:
            raise NotFoundError("Salary record not found")
        return details
