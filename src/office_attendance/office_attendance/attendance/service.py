from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import (
    at_local_time,
    ensure_aware,
    iter_days,
    local_date,
    local_time_of_day,
    now_utc,
    resolve_timezone,
    to_local,
)
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TIMEZONE, LATE_THRESHOLD, SYNTHETIC_ABSENCE_PREFIX
from ..core.enums import AttendanceSource, AttendanceStatus, Audience, EventType, Role
from ..core.exceptions import (
    AlreadyCheckedOutError,
    AlreadyCompletedError,
    AuthorizationError,
    InvalidEditTargetError,
    InvalidEditTimeError,
    MissingLocationError,
    NonWorkingDayError,
    NotCheckedInError,
    NotFoundError,
    OfficeNotConfiguredError,
    ValidationError,
)
from ..holidays.service import HolidayService
from ..locations.repository import LocationRepository
from ..notifications.model import AttendanceEvent
from ..notifications.notifier import Notifier
from ..users.repository import UserRepository
from .admission import WorkWindow, check_geofence, check_time_window
from .factory import AttendanceStrategyFactory
from .model import (
    AttendanceEntry,
    AttendanceRecord,
    AttendanceStats,
    MarkResult,
    PersistedEntry,
    SyntheticAbsence,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

MAX_LISTING_DAYS = 366


class AttendanceService:
    """Owns the daily attendance record lifecycle of a user.

    Admission checks run in a fixed order (non-working day, work window,
    location requirement, existing record, geofence) and every rejection is
    raised before anything is written. Events go to the injected notifier after
    the write succeeded; a notifier failure is logged and never undoes the write.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        holidays: HolidayService,
        locations: LocationRepository,
        notifier: Notifier | None = None,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        work_window: WorkWindow | None = None,
        late_threshold: time = LATE_THRESHOLD,
        default_timezone: str = DEFAULT_TIMEZONE,
        auto_close_day: bool = True,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._attendance = attendance
        self._users = users
        self._holidays = holidays
        self._locations = locations
        self._notifier = notifier
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._window = work_window or WorkWindow()
        self._late_threshold = late_threshold
        self._default_timezone = default_timezone
        self._auto_close_day = bool(auto_close_day)
        self._history_limit = int(history_limit)

    # ------------------------------------------------------------------
    # Check-in / check-out
    # ------------------------------------------------------------------

    def mark_attendance(
        self,
        user_id: int,
        *,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        accuracy: Optional[float] = None,
        source: str | AttendanceSource = AttendanceSource.MOBILE,
        timezone: Optional[str] = None,
        now: datetime | None = None,
    ) -> MarkResult:
        now = ensure_aware(now or now_utc())
        tz = resolve_timezone(timezone, self._default_timezone)
        source = self._parse_source(source)
        today = local_date(now, tz)

        day = self._holidays.check_day(today)
        if not day.is_working_day:
            raise NonWorkingDayError(
                f"Today is a holiday: {day.holiday_name}" if day.is_holiday else "Today is weekend",
                details={"is_holiday": True, "is_weekend": day.is_weekend, "holiday_name": day.label},
            )

        check_time_window(now, tz, self._window)

        if source == AttendanceSource.MOBILE and (latitude is None or longitude is None):
            raise MissingLocationError("Location coordinates are required for mobile attendance")
        if source == AttendanceSource.WEB:
            latitude = 0.0 if latitude is None else latitude
            longitude = 0.0 if longitude is None else longitude

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.is_checked_in:
            if existing.is_checked_out:
                raise AlreadyCompletedError("Attendance already completed for today")
            record = self._close_day(existing, now=now)
            return MarkResult(record=record, action="check_out", message="Check-out successful")

        if source == AttendanceSource.MOBILE:
            office = self._locations.get_active()
            if not office:
                raise OfficeNotConfiguredError("Office location not configured")
            geofence = check_geofence(float(latitude), float(longitude), office, accuracy)
            logger.debug("User %s inside geofence (%.1fm of %.1fm)", user_id, geofence.distance, geofence.allowed_radius)

        # Lateness is judged on the office clock, whatever zone the client sent.
        local_clock = to_local(now, resolve_timezone(None, self._default_timezone)).time()
        strategy = self._factory.for_checkin(local_time=local_clock, late_threshold=self._late_threshold)
        decision = strategy.decide_checkin(local_time=local_clock, late_threshold=self._late_threshold)

        check_out = None
        if self._auto_close_day:
            # The day is closed at check-in time so no background job has to do it.
            check_out = max(at_local_time(today, self._window.end, tz), now)

        record = existing or AttendanceRecord(attendance_id=None, user_id=user_id, work_date=today)
        record = replace(
            record,
            check_in=now,
            check_out=check_out,
            status=decision.status,
            source=source,
            latitude=float(latitude),
            longitude=float(longitude),
        ).recalculated()
        record = self._save(record)

        logger.info("User %s checked in (%s) via %s", user_id, decision.status.value, source.value)
        name = self._display_name(user_id)
        self._emit(
            AttendanceEvent(
                event_type=EventType.CHECK_IN,
                audience=Audience.ADMIN,
                user_id=user_id,
                message=f"{name} checked in ({decision.status.value}) via {source.value}",
                timestamp=now,
                data={"user_name": name, "status": decision.status.value, "source": source.value},
            ),
            AttendanceEvent(
                event_type=EventType.CHECK_IN,
                audience=Audience.USER,
                user_id=user_id,
                message=decision.message,
                timestamp=now,
                data={"status": decision.status.value, "source": source.value},
            ),
        )
        return MarkResult(record=record, action="check_in", message=decision.message, is_late=decision.is_late)

    def check_out(self, user_id: int, *, timezone: Optional[str] = None, now: datetime | None = None) -> AttendanceRecord:
        now = ensure_aware(now or now_utc())
        today = local_date(now, resolve_timezone(timezone, self._default_timezone))

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or not record.is_checked_in:
            raise NotCheckedInError("You must check in before checking out")
        if record.is_checked_out:
            raise AlreadyCheckedOutError("You have already checked out today")

        return self._close_day(record, now=now)

    def _close_day(self, record: AttendanceRecord, *, now: datetime) -> AttendanceRecord:
        decision = self._factory.for_checkout().decide_checkout(current=record.status)
        record = self._save(replace(record, check_out=now, status=decision.status).recalculated())

        logger.info("User %s checked out after %.2fh", record.user_id, record.working_hours)
        name = self._display_name(record.user_id)
        self._emit(
            AttendanceEvent(
                event_type=EventType.CHECK_OUT,
                audience=Audience.ADMIN,
                user_id=record.user_id,
                message=f"{name} checked out",
                timestamp=now,
                data={"user_name": name, "working_hours": record.working_hours},
            ),
            AttendanceEvent(
                event_type=EventType.CHECK_OUT,
                audience=Audience.USER,
                user_id=record.user_id,
                message=decision.message,
                timestamp=now,
                data={"working_hours": record.working_hours},
            ),
        )
        return record

    # ------------------------------------------------------------------
    # Admin edit
    # ------------------------------------------------------------------

    def admin_update(
        self,
        record_ref: int | str,
        *,
        current_role: Role,
        check_in: datetime | None = None,
        check_out: datetime | None = None,
        status: str | AttendanceStatus | None = None,
        edited_by: Optional[str] = None,
        timezone: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit attendance records")

        attendance_id = self._parse_record_ref(record_ref)
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")

        tz = resolve_timezone(timezone, self._default_timezone)
        # Only the time of day is checked, not the record's date or the in/out ordering.
        for label, value in (("Check-in", check_in), ("Check-out", check_out)):
            if value is None:
                continue
            clock = local_time_of_day(ensure_aware(value), tz)
            if not self._window.contains(clock):
                raise InvalidEditTimeError(
                    f"{label} time must be between {self._window.label}",
                    details={"field": label.lower().replace("-", "_"), "time": clock.strftime("%H:%M")},
                )

        new_status = record.status
        if status is not None:
            try:
                new_status = AttendanceStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown attendance status {status!r}")

        updated = replace(
            record,
            check_in=ensure_aware(check_in) if check_in is not None else record.check_in,
            check_out=ensure_aware(check_out) if check_out is not None else record.check_out,
            status=new_status,
        ).recalculated()
        updated = self._save(updated)

        editor = edited_by or "admin"
        logger.info("Attendance record %s updated by %s", attendance_id, editor)
        self._emit(
            AttendanceEvent(
                event_type=EventType.ADMIN_EDIT,
                audience=Audience.ADMIN,
                user_id=record.user_id,
                message=f"Attendance record updated by {editor}",
                timestamp=ensure_aware(now or now_utc()),
                data={"attendance_id": attendance_id, "updated_by": editor},
            )
        )
        return updated

    @staticmethod
    def _parse_record_ref(record_ref: int | str) -> int:
        if isinstance(record_ref, str):
            ref = record_ref.strip()
            if ref.startswith(SYNTHETIC_ABSENCE_PREFIX):
                raise InvalidEditTargetError(
                    "Cannot edit auto-generated absent records. Only actual attendance records can be edited."
                )
            if not ref.isdigit():
                raise InvalidEditTargetError(f"Invalid attendance record id {record_ref!r}")
            record_ref = int(ref)
        if int(record_ref) <= 0:
            raise InvalidEditTargetError(f"Invalid attendance record id {record_ref!r}")
        return int(record_ref)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_today(self, user_id: int, *, timezone: Optional[str] = None, now: datetime | None = None) -> AttendanceRecord:
        now = ensure_aware(now or now_utc())
        today = local_date(now, resolve_timezone(timezone, self._default_timezone))
        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise NotFoundError("No attendance found for today")
        return record

    def get_history(
        self,
        user_id: int,
        *,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> Sequence[AttendanceRecord]:
        if start and end and start > end:
            raise ValidationError("start must not be after end")
        limit = min(int(limit or self._history_limit), self._history_limit)
        return self._attendance.get_history(user_id, start=start, end=end, limit=max(limit, 1))

    def list_all(
        self,
        *,
        day: date | None = None,
        start: date | None = None,
        end: date | None = None,
        user_id: int | None = None,
        timezone: Optional[str] = None,
        now: datetime | None = None,
    ) -> list[AttendanceEntry]:
        """Stored records plus a synthetic absence per active user and working day without one."""
        days = self._resolve_days(day=day, start=start, end=end, timezone=timezone, now=now)
        records = self._attendance.list_range(start=days[0], end=days[-1], user_id=user_id)
        by_user_day = {(r.user_id, r.work_date): r for r in records}
        users = self._users.list_active(user_id=user_id)

        entries: list[AttendanceEntry] = []
        for current in days:
            working = self._holidays.check_day(current).is_working_day
            for user in users:
                record = by_user_day.get((user.user_id, current))
                if record:
                    entries.append(PersistedEntry(record=record, user=user))
                elif working:
                    entries.append(SyntheticAbsence(user=user, work_date=current))
        return entries

    def get_stats(
        self,
        *,
        day: date | None = None,
        timezone: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceStats:
        if day is None:
            now = ensure_aware(now or now_utc())
            day = local_date(now, resolve_timezone(timezone, self._default_timezone))

        total = self._users.count_active()
        day_status = self._holidays.check_day(day)
        if not day_status.is_working_day:
            return AttendanceStats(
                work_date=day,
                total_users=total,
                is_holiday=day_status.is_holiday,
                is_weekend=day_status.is_weekend,
                holiday_name=day_status.holiday_name,
            )

        counts = self._attendance.count_by_status(day)
        present = counts.get(AttendanceStatus.PRESENT, 0)
        late = counts.get(AttendanceStatus.LATE, 0)
        return AttendanceStats(
            work_date=day,
            total_users=total,
            present=present,
            late=late,
            absent=total - present - late,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_days(
        self,
        *,
        day: date | None,
        start: date | None,
        end: date | None,
        timezone: Optional[str],
        now: datetime | None,
    ) -> list[date]:
        if day is not None:
            return [day]
        if start is not None and end is not None:
            if start > end:
                raise ValidationError("start must not be after end")
            days = list(iter_days(start, end))
            if len(days) > MAX_LISTING_DAYS:
                raise ValidationError(f"Date range is limited to {MAX_LISTING_DAYS} days")
            return days
        if start is not None or end is not None:
            raise ValidationError("start and end must be given together")

        now = ensure_aware(now or now_utc())
        return [local_date(now, resolve_timezone(timezone, self._default_timezone))]

    def _save(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.attendance_id is None:
            return self._attendance.create(record)
        return self._attendance.update(record)

    def _display_name(self, user_id: int) -> str:
        user = self._users.get_by_id(user_id)
        return user.full_name if user else f"User {user_id}"

    def _emit(self, *events: AttendanceEvent) -> None:
        if self._notifier is None:
            return
        for event in events:
            try:
                self._notifier.publish(event)
            except Exception:
                logger.exception("Failed to publish %s event for user %s", event.event_type.value, event.user_id)

    @staticmethod
    def _parse_source(source: str | AttendanceSource | None) -> AttendanceSource:
        try:
            return AttendanceSource(source or AttendanceSource.MOBILE)
        except ValueError:
            raise ValidationError(f"Unknown attendance source {source!r}")
