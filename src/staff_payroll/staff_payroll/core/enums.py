from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of a user in the store hierarchy."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    STAFF = "staff"


class StaffStatus(str, Enum):
    ACTIVE = "active"
    ON_NOTICE = "on_notice"
    LEFT = "left"


class AttendanceStatus(str, Enum):
    """Status stored on a daily attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"


class MarkedBy(str, Enum):
    """Who created the attendance record."""

    SELF = "self"
    ADMIN = "admin"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class LateConsequence(str, Enum):
    """What the n-th late arrival of a month costs."""

    WARNING = "WARNING"
    FINE = "FINE"
    HALF_DAY = "HALF_DAY"
    ABSENT = "ABSENT"
