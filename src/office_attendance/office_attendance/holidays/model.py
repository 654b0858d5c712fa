from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import HolidayType


@dataclass(frozen=True)
class Holiday:
    """Domain entity: a non-working calendar date."""

    holiday_id: int
    name: str
    holiday_date: date
    holiday_type: HolidayType = HolidayType.FIXED
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "holiday_id": self.holiday_id,
            "name": self.name,
            "date": self.holiday_date.isoformat(),
            "type": self.holiday_type.value,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class DayStatus:
    """Whether a calendar day is a working day."""

    day: date
    is_weekend: bool
    holiday_name: Optional[str] = None

    @property
    def is_holiday(self) -> bool:
        return self.holiday_name is not None

    @property
    def is_working_day(self) -> bool:
        return not (self.is_weekend or self.is_holiday)

    @property
    def label(self) -> Optional[str]:
        if self.holiday_name:
            return self.holiday_name
        return "Weekend" if self.is_weekend else None

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "is_holiday": not self.is_working_day,
            "is_weekend": self.is_weekend,
            "holiday_name": self.label,
        }
