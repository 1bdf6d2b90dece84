from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus
from ..employees.model import EmployeeSummary


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's status for one day.

    At most one record exists per (employee_id, work_date).
    """

    attendance_id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttendanceDetails:
    """Read model for reports (record joined with the employee identity)."""

    record: AttendanceRecord
    employee: EmployeeSummary

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["employee"] = self.employee.to_dict()
        return out
