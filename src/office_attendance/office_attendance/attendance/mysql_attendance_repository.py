from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import from_naive_utc, to_naive_utc
from ..core.enums import AttendanceSource, AttendanceStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "attendance_id, user_id, work_date, check_in, check_out, status, source, latitude, longitude, working_hours"
)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in=from_naive_utc(r.get("check_in")),
        check_out=from_naive_utc(r.get("check_out")),
        status=AttendanceStatus(r["status"]),
        source=AttendanceSource(r["source"]),
        latitude=r.get("latitude"),
        longitude=r.get("longitude"),
        working_hours=float(r.get("working_hours") or 0.0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_history(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start is not None:
            clauses.append("work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("work_date <= %s")
            params.append(end)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {' AND '.join(clauses)}
                ORDER BY work_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {' AND '.join(clauses)}
                ORDER BY work_date DESC, created_at DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        record = record.recalculated()
        with unique_violation_as("Attendance already recorded for this user today"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, check_in, check_out, status, source, latitude, longitude, working_hours
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.user_id,
                        record.work_date,
                        to_naive_utc(record.check_in),
                        to_naive_utc(record.check_out),
                        record.status.value,
                        record.source.value,
                        record.latitude,
                        record.longitude,
                        record.working_hours,
                    ),
                )
                return replace(record, attendance_id=int(cur.lastrowid))

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        record = record.recalculated()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in=%s, check_out=%s, status=%s, source=%s, latitude=%s, longitude=%s, working_hours=%s
                WHERE attendance_id=%s
                """,
                (
                    to_naive_utc(record.check_in),
                    to_naive_utc(record.check_out),
                    record.status.value,
                    record.source.value,
                    record.latitude,
                    record.longitude,
                    record.working_hours,
                    int(record.attendance_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed, so only a missing id is an error.
            if cur.rowcount == 0:
                cur.execute("SELECT 1 AS found FROM attendance_records WHERE attendance_id=%s", (int(record.attendance_id),))
                if not fetchone(cur):
                    raise NotFoundError("Attendance record not found")
            return record

    def count_by_status(self, work_date: date) -> dict[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status, COUNT(*) AS total FROM attendance_records WHERE work_date=%s GROUP BY status",
                (work_date,),
            )
            return {AttendanceStatus(r["status"]): int(r["total"]) for r in fetchall(cur)}
