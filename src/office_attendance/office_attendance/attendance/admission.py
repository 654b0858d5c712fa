"""Admission rules for attendance actions: work window and geofence."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, tzinfo
from typing import Optional

from ..common.datetime_utils import format_hhmm, local_time_of_day
from ..common.geo import accuracy_buffer_m, haversine_distance_m
from ..core.constants import WORK_END, WORK_START
from ..core.exceptions import OutsideGeofenceError, OutsideTimeWindowError
from ..locations.model import OfficeLocation


@dataclass(frozen=True)
class WorkWindow:
    """Clock range, inclusive at both ends, compared at minute precision."""

    start: time = WORK_START
    end: time = WORK_END

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError("Work window end must be after its start")

    def contains(self, clock: time) -> bool:
        hhmm = time(clock.hour, clock.minute)
        return self.start <= hhmm <= self.end

    @property
    def label(self) -> str:
        return f"{format_hhmm(self.start)} - {format_hhmm(self.end)}"


def check_time_window(now: datetime, tz: tzinfo, window: WorkWindow) -> time:
    """Return the local (hour, minute) of `now`, or raise when it falls outside `window`."""
    clock = local_time_of_day(now, tz)
    if not window.contains(clock):
        raise OutsideTimeWindowError(
            f"Attendance can only be marked between {window.label}",
            details={
                "working_hours": window.label,
                "current_time": format_hhmm(clock),
                "timezone": str(tz),
                "server_time": now.isoformat(),
            },
        )
    return clock


@dataclass(frozen=True)
class GeofenceResult:
    distance: float
    base_radius: float
    accuracy_buffer: float

    @property
    def allowed_radius(self) -> float:
        return self.base_radius + self.accuracy_buffer

    @property
    def admitted(self) -> bool:
        return self.distance <= self.allowed_radius

    def details(self) -> dict:
        return {
            "distance": round(self.distance),
            "allowed_radius": round(self.allowed_radius),
            "base_radius": self.base_radius,
            "accuracy_buffer": round(self.accuracy_buffer),
        }


def measure_geofence(
    latitude: float,
    longitude: float,
    office: OfficeLocation,
    accuracy: Optional[float],
) -> GeofenceResult:
    return GeofenceResult(
        distance=haversine_distance_m(latitude, longitude, office.latitude, office.longitude),
        base_radius=float(office.radius),
        accuracy_buffer=accuracy_buffer_m(accuracy),
    )


def check_geofence(
    latitude: float,
    longitude: float,
    office: OfficeLocation,
    accuracy: Optional[float],
) -> GeofenceResult:
    result = measure_geofence(latitude, longitude, office, accuracy)
    if not result.admitted:
        raise OutsideGeofenceError("You are outside the office area", details=result.details())
    return result
