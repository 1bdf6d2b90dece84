from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceDetails, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, *, employee_id: int, work_date: date, status: AttendanceStatus) -> int:
        """Insert the day's record, or overwrite the status of the one already there; returns its id."""

        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceDetails]:
        """Both ends inclusive, oldest day first."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceDetails]:
        """All records of one day ordered by employee code."""

        raise NotImplementedError
