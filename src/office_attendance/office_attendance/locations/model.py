from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OfficeLocation:
    """Domain entity: the geofenced office. At most one is active."""

    location_id: int
    latitude: float
    longitude: float
    radius: int
    address: str
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "location_id": self.location_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius": self.radius,
            "address": self.address,
            "is_active": self.is_active,
        }
