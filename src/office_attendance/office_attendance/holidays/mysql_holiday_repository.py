from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import HolidayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import Holiday
from .repository import HolidayRepository

_COLUMNS = "holiday_id, name, holiday_date, holiday_type, is_active"


def _to_holiday(row: dict) -> Holiday:
    return Holiday(
        holiday_id=int(row["holiday_id"]),
        name=row["name"],
        holiday_date=row["holiday_date"],
        holiday_type=HolidayType(row["holiday_type"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_date(self, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM holidays WHERE holiday_date=%s AND is_active=1",
                (holiday_date,),
            )
            row = fetchone(cur)
            return _to_holiday(row) if row else None

    def list_active(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM holidays WHERE is_active=1 ORDER BY holiday_date ASC")
            return [_to_holiday(r) for r in fetchall(cur)]

    def create(self, *, name: str, holiday_date: date, holiday_type: HolidayType) -> int:
        with unique_violation_as(f"A holiday already exists on {holiday_date.isoformat()}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO holidays(name, holiday_date, holiday_type, is_active) VALUES(%s,%s,%s,1)",
                    (name, holiday_date, holiday_type.value),
                )
                return int(cur.lastrowid)

    def delete(self, *, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
