from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    message: str

    @property
    def is_late(self) -> bool:
        return self.status == AttendanceStatus.LATE


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, local_time: time, late_threshold: time) -> StatusDecision:
        raise NotImplementedError

    def decide_checkout(self, *, current: AttendanceStatus) -> StatusDecision:
        # Check-out never changes the status set at check-in.
        return StatusDecision(status=current, message="Check-out successful")
