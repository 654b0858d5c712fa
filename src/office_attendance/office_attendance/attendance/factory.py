from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, local_time: time, late_threshold: time) -> AttendanceStrategy:
        if local_time > late_threshold:
            return LateStrategy()
        return PresentStrategy()

    def for_checkout(self) -> AttendanceStrategy:
        return PresentStrategy()
