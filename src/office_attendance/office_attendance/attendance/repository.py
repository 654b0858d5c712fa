from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_history(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: int,
    ) -> Sequence[AttendanceRecord]:
        """Most recent first."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert and return the record with its id.

        Raises DuplicateRecordError when (user_id, work_date) already exists.
        """

        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def count_by_status(self, work_date: date) -> dict[AttendanceStatus, int]:
        raise NotImplementedError
