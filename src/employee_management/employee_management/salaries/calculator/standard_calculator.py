from __future__ import annotations

from decimal import Decimal

from .base import SalaryCalculator


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: basic + allowances - deductions."""

    def net_salary(self, *, basic_salary: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        return basic_salary + allowances - deductions
