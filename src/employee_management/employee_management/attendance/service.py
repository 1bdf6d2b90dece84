from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..auth.gate import require_admin
from ..auth.model import Caller
from ..common.datetime_utils import parse_date_field
from ..common.validators import is_blank
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceDetails, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _parse_employee_id(value: Any) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError("Invalid employee ID")


class AttendanceService:
    """Attendance log: one status per employee per day."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def mark(self, *, caller: Caller, employee_id: Any, work_date: Any, status: Any) -> tuple[AttendanceRecord, bool]:
        """Upsert the day's status; returns ``(record, created)``.

        Read-before-write without locking; the repository's create also overwrites an existing
        day, so concurrent marks for the same day are last-write-wins.
        """
        require_admin(caller)
        if is_blank(employee_id) or is_blank(work_date) or is_blank(status):
            raise ValidationError("Employee ID, date and status are required")

        emp_id = _parse_employee_id(employee_id)
        day = parse_date_field(work_date, "Invalid date")
        try:
            att_status = AttendanceStatus(str(status).strip().lower())
        except ValueError:
            raise ValidationError("Invalid attendance status")

        if not self._employees.get_by_id(emp_id):
            raise NotFoundError("Employee not found")

        existing = self._attendance.get_for_employee_and_date(emp_id, day)
        if existing:
            self._attendance.update_status(attendance_id=existing.attendance_id, status=att_status)
            logger.info("attendance %s for employee %s on %s -> %s", existing.attendance_id, emp_id, day, att_status.value)
            return AttendanceRecord(existing.attendance_id, emp_id, day, att_status), False

        attendance_id = self._attendance.create(employee_id=emp_id, work_date=day, status=att_status)
        logger.info("attendance %s marked for employee %s on %s: %s", attendance_id, emp_id, day, att_status.value)
        return AttendanceRecord(attendance_id, emp_id, day, att_status), True

    def _scope_employee(self, caller: Caller, employee_id: Any) -> Optional[int]:
        """Admins may query anyone; other callers are pinned to their own employee record."""
        requested = None if is_blank(employee_id) else _parse_employee_id(employee_id)
        if caller.is_admin:
            return requested

        own = self._employees.get_by_account_id(caller.account_id)
        if not own:
            raise NotFoundError("Employee not found")
        if requested is not None and requested != own.employee_id:
            raise AuthorizationError("Access denied. You can only view your own attendance.")
        return own.employee_id

    def get_for_day(self, *, caller: Caller, employee_id: Any, work_date: Any) -> AttendanceRecord:
        if is_blank(employee_id) and caller.is_admin:
            raise ValidationError("Employee ID is required")
        emp_id = self._scope_employee(caller, employee_id)
        day = parse_date_field(work_date, "Invalid date")
        record = self._attendance.get_for_employee_and_date(emp_id, day)
        if not record:
            raise NotFoundError("No attendance found")
        return record

    def report(
        self,
        *,
        caller: Caller,
        start_date: Any,
        end_date: Any,
        employee_id: Any = None,
    ) -> Sequence[AttendanceDetails]:
        if is_blank(start_date) or is_blank(end_date):
            raise ValidationError("Start date and end date are required")
        start = parse_date_field(start_date, "Invalid start date")
        end = parse_date_field(end_date, "Invalid end date")
        if start > end:
            raise ValidationError("Start date cannot be after end date")
        emp_id = self._scope_employee(caller, employee_id)
        return self._attendance.list_range(start_date=start, end_date=end, employee_id=emp_id)

    def for_date(self, *, caller: Caller, work_date: Any) -> Sequence[AttendanceDetails]:
        require_admin(caller)
        if is_blank(work_date):
            raise ValidationError("Date is required")
        day: date = parse_date_field(work_date, "Invalid date")
        return self._attendance.list_for_date(day)
