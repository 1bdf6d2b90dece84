from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..auth.gate import require_admin, require_self_or_admin
from ..auth.model import Caller
from ..common.datetime_utils import now_local, parse_date_field
from ..common.validators import is_blank
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveDetails
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

DECISION_STATUSES = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


class LeaveService:
    """Leave workflow: self-submitted requests, admin decisions (pending -> approved | rejected)."""

    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def submit(
        self,
        *,
        caller: Caller,
        leave_type: Any,
        from_date: Any,
        to_date: Any,
        description: Any,
        now: Optional[datetime] = None,
    ) -> LeaveDetails:
        if any(is_blank(v) for v in (leave_type, from_date, to_date, description)):
            raise ValidationError("All fields are required")

        try:
            ltype = LeaveType(str(leave_type).strip().lower())
        except ValueError:
            raise ValidationError("Invalid leave type")

        start = parse_date_field(from_date, "Invalid from date")
        end = parse_date_field(to_date, "Invalid to date")
        now = now or now_local()

        if start > end:
            raise ValidationError("From date cannot be after to date")
        if start < now.date():
            raise ValidationError("Cannot apply leave for past dates")

        # leave is always filed for the caller's own employee record
        employee = self._employees.get_by_account_id(caller.account_id)
        if not employee:
            raise NotFoundError("Employee not found")

        leave_id = self._leaves.create(
            employee_id=employee.employee_id,
            leave_type=ltype,
            from_date=start,
            to_date=end,
            description=str(description).strip(),
            applied_date=now,
        )
        logger.info("leave %s submitted by employee %s (%s..%s)", leave_id, employee.employee_id, start, end)
        return self._details_or_404(leave_id)

    def list_all(self, *, caller: Caller) -> Sequence[LeaveDetails]:
        require_admin(caller)
        return self._leaves.list_details()

    def list_mine(self, *, caller: Caller) -> Sequence[LeaveDetails]:
        employee = self._employees.get_by_account_id(caller.account_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return self._leaves.list_details(employee_id=employee.employee_id)

    def get(self, *, caller: Caller, leave_id: int) -> LeaveDetails:
        details = self._details_or_404(leave_id)
        require_self_or_admin(caller, details.employee.account_id, "Access denied. You can only view your own leave requests.")
        return details

    def transition(
        self,
        *,
        caller: Caller,
        leave_id: int,
        new_status: Any,
        now: Optional[datetime] = None,
    ) -> LeaveDetails:
        """Approve or reject a pending request; the caller (an admin) is recorded as approver."""
        require_admin(caller, "Only admins can approve or reject leave requests")

        try:
            status = LeaveStatus(str(new_status or "").strip().lower())
        except ValueError:
            raise ValidationError("Invalid leave status")
        if status not in DECISION_STATUSES:
            raise ValidationError("Leave status can only be changed to approved or rejected")

        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        if leave.is_decided:
            raise ConflictError(f"Leave request has already been {leave.status.value}")

        decided = self._leaves.decide(
            leave_id=leave.leave_id,
            status=status,
            approved_by=caller.account_id,
            approved_date=now or now_local(),
        )
        if not decided:
            # another admin decided it between the read and the update
            raise ConflictError("Leave request has already been processed")

        logger.info("leave %s %s by account %s", leave.leave_id, status.value, caller.account_id)
        return self._details_or_404(leave.leave_id)

    def delete(self, *, caller: Caller, leave_id: int) -> None:
        details = self._details_or_404(leave_id)
        require_self_or_admin(caller, details.employee.account_id, "Access denied. You can only delete your own leave requests.")
        self._leaves.delete(details.leave.leave_id)
        logger.info("leave %s deleted by account %s", details.leave.leave_id, caller.account_id)

    def _details_or_404(self, leave_id: int) -> LeaveDetails:
        details = self._leaves.get_details(int(leave_id))
        if not details:
            raise NotFoundError("Leave request not found")
        return details
