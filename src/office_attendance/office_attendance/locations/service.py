from __future__ import annotations

import logging

from ..common.validators import require_non_empty, require_range
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, OfficeNotConfiguredError, ValidationError
from .model import OfficeLocation
from .repository import LocationRepository

logger = logging.getLogger(__name__)


class LocationService:
    def __init__(self, locations: LocationRepository):
        self._locations = locations

    def get_active(self) -> OfficeLocation:
        location = self._locations.get_active()
        if not location:
            raise OfficeNotConfiguredError("Office location not configured")
        return location

    def set_location(
        self,
        *,
        current_role: Role,
        latitude: float,
        longitude: float,
        radius: int,
        address: str,
    ) -> OfficeLocation:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can set the office location")

        latitude = require_range(float(latitude), "Latitude", low=-90, high=90)
        longitude = require_range(float(longitude), "Longitude", low=-180, high=180)
        if int(radius) < 1:
            raise ValidationError("Radius must be at least 1 meter")
        address = require_non_empty(address, "Address")

        location_id = self._locations.replace_active(
            latitude=latitude,
            longitude=longitude,
            radius=int(radius),
            address=address,
        )
        logger.info("Office location set to (%.6f, %.6f) r=%sm", latitude, longitude, radius)
        return OfficeLocation(
            location_id=location_id,
            latitude=latitude,
            longitude=longitude,
            radius=int(radius),
            address=address,
        )
