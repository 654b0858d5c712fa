"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TIMEZONE = "Asia/Kolkata"

WORK_START = time(9, 0)
WORK_END = time(17, 0)
LATE_THRESHOLD = time(10, 0)

# Saturday, Sunday (date.weekday()).
WEEKEND_DAYS = frozenset({5, 6})

EARTH_RADIUS_M = 6_371_000.0
DEFAULT_OFFICE_RADIUS_M = 100
DEFAULT_ACCURACY_BUFFER_M = 30.0
MIN_ACCURACY_BUFFER_M = 20.0
MAX_ACCURACY_BUFFER_M = 100.0

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_NOTIFICATION_LIMIT = 50

SYNTHETIC_ABSENCE_PREFIX = "absent-"
