from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
import pytz

from src.office_attendance.office_attendance.attendance.model import AttendanceRecord
from src.office_attendance.office_attendance.attendance.service import AttendanceService
from src.office_attendance.office_attendance.core.enums import AttendanceStatus, HolidayType, Role
from src.office_attendance.office_attendance.core.exceptions import DuplicateRecordError
from src.office_attendance.office_attendance.holidays.model import Holiday
from src.office_attendance.office_attendance.holidays.service import HolidayService
from src.office_attendance.office_attendance.locations.model import OfficeLocation
from src.office_attendance.office_attendance.notifications.model import Notification
from src.office_attendance.office_attendance.users.model import User

IST = pytz.timezone("Asia/Kolkata")

# Tuesday; 2026-02-07/08 is the following weekend.
WORKDAY = date(2026, 2, 3)

OFFICE_LAT = 12.9716
OFFICE_LON = 77.5946


def local(day: date, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return IST.localize(datetime(day.year, day.month, day.day, hour, minute, second))


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def list_active(self, *, user_id: Optional[int] = None):
        return [u for u in self._users.values() if u.is_active and (user_id is None or u.user_id == user_id)]

    def count_active(self) -> int:
        return len([u for u in self._users.values() if u.is_active])


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.writes = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(attendance_id)

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.user_id == user_id and r.work_date == work_date:
                return r
        return None

    def get_history(self, user_id: int, *, start=None, end=None, limit: int):
        items = [
            r
            for r in self.records.values()
            if r.user_id == user_id and (start is None or r.work_date >= start) and (end is None or r.work_date <= end)
        ]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None):
        return [
            r
            for r in self.records.values()
            if start <= r.work_date <= end and (user_id is None or r.user_id == user_id)
        ]

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        if any(r.user_id == record.user_id and r.work_date == record.work_date for r in self.records.values()):
            raise DuplicateRecordError("Attendance already recorded for this user today")
        self._id += 1
        self.writes += 1
        record = replace(record, attendance_id=self._id)
        self.records[self._id] = record
        return record

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        self.writes += 1
        self.records[record.attendance_id] = record
        return record

    def count_by_status(self, work_date: date):
        counts: dict[AttendanceStatus, int] = {}
        for r in self.records.values():
            if r.work_date == work_date:
                counts[r.status] = counts.get(r.status, 0) + 1
        return counts

    def seed(self, **fields) -> AttendanceRecord:
        self._id += 1
        record = AttendanceRecord(attendance_id=self._id, **fields).recalculated()
        self.records[self._id] = record
        return record


class InMemoryHolidays:
    def __init__(self, holidays: Optional[list[Holiday]] = None):
        self._by_id = {h.holiday_id: h for h in (holidays or [])}

    def get_active_for_date(self, holiday_date: date) -> Optional[Holiday]:
        for h in self._by_id.values():
            if h.holiday_date == holiday_date and h.is_active:
                return h
        return None

    def list_active(self):
        return [h for h in self._by_id.values() if h.is_active]

    def create(self, *, name: str, holiday_date: date, holiday_type: HolidayType) -> int:
        if any(h.holiday_date == holiday_date for h in self._by_id.values()):
            raise DuplicateRecordError(f"A holiday already exists on {holiday_date.isoformat()}")
        holiday_id = max(self._by_id, default=0) + 1
        self._by_id[holiday_id] = Holiday(holiday_id, name, holiday_date, holiday_type)
        return holiday_id

    def delete(self, *, holiday_id: int) -> bool:
        return self._by_id.pop(holiday_id, None) is not None


class InMemoryLocations:
    def __init__(self, location: Optional[OfficeLocation] = None):
        self.locations: list[OfficeLocation] = [location] if location else []

    def get_active(self) -> Optional[OfficeLocation]:
        active = [loc for loc in self.locations if loc.is_active]
        return active[-1] if active else None

    def replace_active(self, *, latitude: float, longitude: float, radius: int, address: str) -> int:
        self.locations = [replace(loc, is_active=False) for loc in self.locations]
        location_id = len(self.locations) + 1
        self.locations.append(OfficeLocation(location_id, latitude, longitude, radius, address))
        return location_id


class InMemoryNotifications:
    def __init__(self):
        self.items: list[Notification] = []

    def create(self, *, user_id, title, body, notification_type, data=None) -> int:
        notification_id = max((n.notification_id for n in self.items), default=0) + 1
        self.items.append(
            Notification(
                notification_id=notification_id,
                user_id=user_id,
                title=title,
                body=body,
                notification_type=notification_type,
                is_read=False,
                created_at=datetime(2026, 2, 3, 4, 0, tzinfo=pytz.utc),
                data=data or {},
            )
        )
        return notification_id

    def list_for_user(self, user_id, *, unread_only, limit):
        items = [n for n in self.items if n.user_id == user_id and not (unread_only and n.is_read)]
        return list(reversed(items))[:limit]

    def mark_read(self, *, user_id, notification_id) -> bool:
        for i, n in enumerate(self.items):
            if n.notification_id == notification_id and n.user_id == user_id:
                self.items[i] = replace(n, is_read=True)
                return True
        return False

    def count_unread(self, user_id) -> int:
        return len([n for n in self.items if n.user_id == user_id and not n.is_read])

    def delete_for_user(self, user_id) -> int:
        kept = [n for n in self.items if n.user_id != user_id]
        deleted = len(self.items) - len(kept)
        self.items = kept
        return deleted


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)


class FailingNotifier:
    def publish(self, event) -> None:
        raise ConnectionError("socket transport down")


@pytest.fixture
def users():
    return InMemoryUsers(
        [
            User(user_id=1, full_name="Asha Rao", email="asha@example.com", role=Role.EMPLOYEE, department="Eng"),
            User(user_id=2, full_name="Ravi Kumar", email="ravi@example.com", role=Role.EMPLOYEE, department="Ops"),
            User(user_id=9, full_name="Admin", email="admin@example.com", role=Role.ADMIN),
            User(user_id=5, full_name="Former", email="former@example.com", role=Role.EMPLOYEE, is_active=False),
        ]
    )


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def holidays_repo():
    return InMemoryHolidays([Holiday(1, "Republic Day", date(2026, 1, 26), HolidayType.RECURRING)])


@pytest.fixture
def office():
    return OfficeLocation(location_id=1, latitude=OFFICE_LAT, longitude=OFFICE_LON, radius=100, address="MG Road")


@pytest.fixture
def locations_repo(office):
    return InMemoryLocations(office)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_service(attendance_repo, users, holidays_repo, locations_repo, notifier):
    def _make(**kwargs) -> AttendanceService:
        return AttendanceService(
            attendance_repo,
            users,
            HolidayService(holidays_repo),
            kwargs.pop("locations", locations_repo),
            kwargs.pop("notifier", notifier),
            default_timezone="Asia/Kolkata",
            **kwargs,
        )

    return _make


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def fixed_now():
    return local(WORKDAY, 9, 30)
