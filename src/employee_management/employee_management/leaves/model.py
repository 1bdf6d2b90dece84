from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_or_none
from ..core.enums import LeaveStatus, LeaveType
from ..employees.model import EmployeeSummary


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    leave_type: LeaveType
    from_date: date
    to_date: date
    description: str
    status: LeaveStatus
    applied_date: datetime
    approved_by: Optional[int] = None
    approved_date: Optional[datetime] = None

    @property
    def is_decided(self) -> bool:
        return self.status != LeaveStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employeeId": self.employee_id,
            "leaveType": self.leave_type.value,
            "fromDate": self.from_date.isoformat(),
            "toDate": self.to_date.isoformat(),
            "description": self.description,
            "status": self.status.value,
            "appliedDate": iso_or_none(self.applied_date),
            "approvedBy": self.approved_by,
            "approvedDate": iso_or_none(self.approved_date),
        }


@dataclass(frozen=True)
class LeaveDetails:
    """Read model: leave joined with employee/account/department for display."""

    leave: LeaveRequest
    employee: EmployeeSummary

    def to_dict(self) -> dict:
        out = self.leave.to_dict()
        out["employee"] = self.employee.to_dict()
        return out
