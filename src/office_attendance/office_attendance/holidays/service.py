from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..common.datetime_utils import is_weekend
from ..common.validators import require_non_empty
from ..core.enums import HolidayType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DayStatus, Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def check_day(self, day: date) -> DayStatus:
        holiday = self._holidays.get_active_for_date(day)
        return DayStatus(day=day, is_weekend=is_weekend(day), holiday_name=holiday.name if holiday else None)

    def list_active(self) -> Sequence[Holiday]:
        return sorted(self._holidays.list_active(), key=lambda h: h.holiday_date)

    def create(
        self,
        *,
        current_role: Role,
        name: str,
        holiday_date: date,
        holiday_type: str | HolidayType = HolidayType.FIXED,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage holidays")

        name = require_non_empty(name, "Holiday name")
        try:
            kind = HolidayType(holiday_type or HolidayType.FIXED)
        except ValueError:
            raise ValidationError(f"Unknown holiday type {holiday_type!r}")

        holiday_id = self._holidays.create(name=name, holiday_date=holiday_date, holiday_type=kind)
        logger.info("Holiday %s created for %s", name, holiday_date.isoformat())
        return holiday_id

    def delete(self, *, current_role: Role, holiday_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage holidays")

        if not self._holidays.delete(holiday_id=int(holiday_id)):
            raise NotFoundError("Holiday not found")
        logger.info("Holiday %s deleted", holiday_id)
