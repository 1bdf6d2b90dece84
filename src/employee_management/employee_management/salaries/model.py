from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..employees.model import EmployeeSummary


@dataclass(frozen=True)
class SalaryRecord:
    salary_id: int
    employee_id: int
    basic_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    pay_date: date

    def to_dict(self) -> dict:
        return {
            "id": self.salary_id,
            "employeeId": self.employee_id,
            "basicSalary": float(self.basic_salary),
            "allowances": float(self.allowances),
            "deductions": float(self.deductions),
            "netSalary": float(self.net_salary),
            "payDate": self.pay_date.isoformat(),
        }


@dataclass(frozen=True)
class SalaryDetails:
    salary: SalaryRecord
    employee: EmployeeSummary

    def to_dict(self) -> dict:
        out = self.salary.to_dict()
        out["employee"] = self.employee.to_dict()
        return out
