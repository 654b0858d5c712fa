from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Attendance status stored with each record.

    HALF_DAY and ABSENT are only set through an admin edit.
    """

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    HALF_DAY = "half_day"


class AttendanceSource(str, Enum):
    """Where the attendance action came from; decides whether the geofence applies."""

    MOBILE = "mobile"
    WEB = "web"


class HolidayType(str, Enum):
    FIXED = "fixed"
    RECURRING = "recurring"


class EventType(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    ADMIN_EDIT = "admin_edit"


class Audience(str, Enum):
    """Who an event is addressed to: the admin room or the acting user."""

    ADMIN = "admin"
    USER = "user"
