"""Great-circle distance and the geofence admission radius."""
from __future__ import annotations

import math
from typing import Optional

from ..core.constants import (
    DEFAULT_ACCURACY_BUFFER_M,
    EARTH_RADIUS_M,
    MAX_ACCURACY_BUFFER_M,
    MIN_ACCURACY_BUFFER_M,
)


def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def accuracy_buffer_m(accuracy: Optional[float]) -> float:
    """Reported GPS accuracy clamped to [20, 100] m; 30 m when the client sent none."""
    if not accuracy:
        return DEFAULT_ACCURACY_BUFFER_M
    return min(max(float(accuracy), MIN_ACCURACY_BUFFER_M), MAX_ACCURACY_BUFFER_M)
