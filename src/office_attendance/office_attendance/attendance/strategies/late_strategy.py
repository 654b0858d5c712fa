from __future__ import annotations

from datetime import time

from ...common.datetime_utils import format_hhmm
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, local_time: time, late_threshold: time) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.LATE,
            message=f"Marked as late (after {format_hhmm(late_threshold)})",
        )
