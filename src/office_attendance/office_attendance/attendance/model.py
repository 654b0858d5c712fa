from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Literal, Optional, Union

from ..core.constants import SYNTHETIC_ABSENCE_PREFIX
from ..core.enums import AttendanceSource, AttendanceStatus
from ..users.model import User


def compute_working_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> Optional[float]:
    if check_in is None or check_out is None:
        return None
    return (check_out - check_in).total_seconds() / 3600.0


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (user, calendar day)."""

    attendance_id: Optional[int]
    user_id: int
    work_date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    status: AttendanceStatus = AttendanceStatus.ABSENT
    source: AttendanceSource = AttendanceSource.MOBILE
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    working_hours: float = 0.0

    @property
    def location(self) -> Optional[tuple[float, float]]:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    @property
    def is_checked_in(self) -> bool:
        return self.check_in is not None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out is not None

    def recalculated(self) -> "AttendanceRecord":
        """Copy with working_hours brought in line with check_in/check_out."""
        hours = compute_working_hours(self.check_in, self.check_out)
        if hours is None or hours == self.working_hours:
            return self
        return replace(self, working_hours=hours)

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "check_in": _iso(self.check_in),
            "check_out": _iso(self.check_out),
            "status": self.status.value,
            "source": self.source.value,
            "location": (
                {"latitude": self.latitude, "longitude": self.longitude} if self.location else None
            ),
            "working_hours": self.working_hours,
        }


@dataclass(frozen=True)
class PersistedEntry:
    """Listing entry backed by a stored record."""

    record: AttendanceRecord
    user: User
    kind: Literal["persisted"] = "persisted"

    @property
    def work_date(self) -> date:
        return self.record.work_date

    def to_dict(self) -> dict:
        return {**self.record.to_dict(), "id": str(self.record.attendance_id), "kind": self.kind, "user": self.user.summary()}


@dataclass(frozen=True)
class SyntheticAbsence:
    """Display-only absence for a user with no record on a working day. Never stored."""

    user: User
    work_date: date
    kind: Literal["synthetic_absence"] = "synthetic_absence"

    @property
    def synthetic_id(self) -> str:
        return f"{SYNTHETIC_ABSENCE_PREFIX}{self.user.user_id}-{self.work_date.isoformat()}"

    def to_dict(self) -> dict:
        return {
            "id": self.synthetic_id,
            "attendance_id": None,
            "kind": self.kind,
            "user_id": self.user.user_id,
            "user": self.user.summary(),
            "date": self.work_date.isoformat(),
            "check_in": None,
            "check_out": None,
            "status": AttendanceStatus.ABSENT.value,
            "source": None,
            "location": None,
            "working_hours": 0.0,
        }


AttendanceEntry = Union[PersistedEntry, SyntheticAbsence]


@dataclass(frozen=True)
class MarkResult:
    """Outcome of mark_attendance: either a check-in or the implicit check-out."""

    record: AttendanceRecord
    action: Literal["check_in", "check_out"]
    message: str
    is_late: bool = False

    def to_dict(self) -> dict:
        return {**self.record.to_dict(), "action": self.action, "message": self.message, "is_late": self.is_late}


@dataclass(frozen=True)
class AttendanceStats:
    work_date: date
    total_users: int
    present: int = 0
    late: int = 0
    absent: int = 0
    is_holiday: bool = False
    is_weekend: bool = False
    holiday_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "total_users": self.total_users,
            "present_today": self.present,
            "late_today": self.late,
            "absent_today": self.absent,
            "is_holiday": self.is_holiday,
            "is_weekend": self.is_weekend,
            "holiday_name": self.holiday_name,
        }
