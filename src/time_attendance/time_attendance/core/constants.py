"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

OVERTIME_THRESHOLD_HOURS = 40
OVERTIME_MULTIPLIER = 1.5
PERIOD_DAYS = 7
DEFAULT_LIST_LIMIT = 200
