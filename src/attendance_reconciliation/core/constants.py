"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAY_OFF_TEMPLATE_NAME = "OFF"
MIDNIGHT_START = "00:00"
UNKNOWN_EMPLOYEE_NAME = "Unknown"
UNKNOWN_SHIFT_NAME = "Unknown Shift"

UNDERTIME_TOLERANCE_MINUTES = 1
BREAK_TOLERANCE_MINUTES = 5

DEFAULT_TIMEZONE = "UTC"
DEFAULT_MAX_WORKERS = 4
DEFAULT_REPORT_DAYS = 7
