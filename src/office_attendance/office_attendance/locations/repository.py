from __future__ import annotations

from typing import Optional, Protocol

from .model import OfficeLocation


class LocationRepository(Protocol):
    def get_active(self) -> Optional[OfficeLocation]:
        raise NotImplementedError

    def replace_active(self, *, latitude: float, longitude: float, radius: int, address: str) -> int:
        """Deactivate every existing location and insert the new active one atomically."""

        raise NotImplementedError
