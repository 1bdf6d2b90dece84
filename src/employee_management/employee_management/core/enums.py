from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    RESIGNED = "resigned"


class LeaveType(str, Enum):
    SICK = "sick"
    ANNUAL = "annual"
    CASUAL = "casual"


class LeaveStatus(str, Enum):
    """Leave approval workflow: PENDING -> APPROVED | REJECTED (both terminal)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    """Day status stored for one employee."""

    PRESENT = "present"
    ABSENT = "absent"
    SICK = "sick"
    LEAVE = "leave"
