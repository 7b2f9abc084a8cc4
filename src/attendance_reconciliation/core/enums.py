from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles allowed to act on lifecycle state."""

    ADMIN = "admin"
    REVIEWER = "reviewer"
    STAFF = "staff"


class TimeEventType(str, Enum):
    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"
    START_BREAK = "START_BREAK"
    END_BREAK = "END_BREAK"


class TimeEventSource(str, Enum):
    DEVICE = "Device"
    MANUAL = "Manual"


class AttendanceTag(str, Enum):
    """Schedule-deviation tags attached to a daily record."""

    LATE_IN = "LATE_IN"
    UNDERTIME = "UNDERTIME"
    MISSING_OUT = "MISSING_OUT"
    ABSENT = "ABSENT"


class RecordStatus(str, Enum):
    """Review state of a daily attendance record."""

    PENDING = "Pending"
    REVIEWED = "Reviewed"
    DISPUTED = "Disputed"
    FINALIZED = "Finalized"


class ExceptionType(str, Enum):
    LATE_IN = "LateIn"
    UNDERTIME = "Undertime"
    MISSING_IN = "MissingIn"
    MISSING_OUT = "MissingOut"
    OUTSIDE_FENCE = "OutsideFence"
    DOUBLE_LOG = "DoubleLog"
    MISSING_BREAK = "MissingBreak"
    EXTENDED_BREAK = "ExtendedBreak"


class ExceptionStatus(str, Enum):
    PENDING = "Pending"
    ACKNOWLEDGED = "Acknowledged"
