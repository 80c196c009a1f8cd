from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role; admins are never paid through the payroll run."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class EmploymentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Day status stored on an attendance row."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"
    SICK = "sick"


class ApprovalStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    FINAL = "final"


class ActivityType(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
