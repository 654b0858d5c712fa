from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .attendance.admission import WorkWindow
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_hhmm
from .core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TIMEZONE, LATE_THRESHOLD, WORK_END, WORK_START
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.notifier import FanoutNotifier, InboxNotifier, LoggingNotifier, Notifier
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    holidays_repo: HolidayRepository
    locations_repo: LocationRepository
    notifications_repo: NotificationRepository

    notifier: Notifier
    holiday_service: HolidayService
    location_service: LocationService
    notification_service: NotificationService
    attendance_service: AttendanceService

    settings: dict[str, Any] = field(default_factory=dict)
    conn: Optional[DatabaseConnection] = None


def attendance_settings(attendance_config: Optional[dict] = None) -> dict[str, Any]:
    """Normalize the ATTENDANCE settings dict (times given as HH:MM strings)."""
    cfg = dict(attendance_config or {})

    def _clock(key: str, default):
        value = cfg.get(key)
        return parse_hhmm(value) if isinstance(value, str) else (value or default)

    return {
        "timezone": cfg.get("timezone") or DEFAULT_TIMEZONE,
        "work_start": _clock("work_start", WORK_START),
        "work_end": _clock("work_end", WORK_END),
        "late_threshold": _clock("late_threshold", LATE_THRESHOLD),
        "auto_close_day": bool(cfg.get("auto_close_day", True)),
        "history_limit": int(cfg.get("history_limit", DEFAULT_HISTORY_LIMIT)),
    }


def wire_container(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    holidays_repo: HolidayRepository,
    locations_repo: LocationRepository,
    notifications_repo: NotificationRepository,
    notifier: Notifier | None = None,
    attendance_config: Optional[dict] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    settings = attendance_settings(attendance_config)
    notifier = notifier or FanoutNotifier([LoggingNotifier(), InboxNotifier(notifications_repo)])

    holiday_service = HolidayService(holidays_repo)
    location_service = LocationService(locations_repo)
    notification_service = NotificationService(notifications_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        holiday_service,
        locations_repo,
        notifier,
        strategy_factory=AttendanceStrategyFactory(),
        work_window=WorkWindow(start=settings["work_start"], end=settings["work_end"]),
        late_threshold=settings["late_threshold"],
        default_timezone=settings["timezone"],
        auto_close_day=settings["auto_close_day"],
        history_limit=settings["history_limit"],
    )

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        holidays_repo=holidays_repo,
        locations_repo=locations_repo,
        notifications_repo=notifications_repo,
        notifier=notifier,
        holiday_service=holiday_service,
        location_service=location_service,
        notification_service=notification_service,
        attendance_service=attendance_service,
        settings=settings,
        conn=conn,
    )


def build_container(*, db_config: dict, attendance_config: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        attendance_config=attendance_config,
        conn=conn,
    )
