from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Check-in at or before the late threshold."""

    def decide_checkin(self, *, local_time: time, late_threshold: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, message="Attendance marked successfully")
