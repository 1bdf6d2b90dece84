from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveDetails, LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        description: str,
        applied_date: datetime,
    ) -> int:
        """Insert a PENDING leave request and return its id."""

        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def get_details(self, leave_id: int) -> Optional[LeaveDetails]:
        raise NotImplementedError

    def list_details(self, *, employee_id: Optional[int] = None) -> Sequence[LeaveDetails]:
        """Newest first (applied_date descending)."""

        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        approved_date: datetime,
    ) -> bool:
        """Move a PENDING request to ``status``; False when it is missing or already decided."""

        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError
