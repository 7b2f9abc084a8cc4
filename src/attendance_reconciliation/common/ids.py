"""Deterministic identifiers for derived records.

Ids are built only from stable upstream keys (assignment id, event id) so that
re-running the engine on the same inputs always yields the same ids. The
prefix identifies the rule that produced the exception.
"""

from __future__ import annotations

from ..core.enums import TimeEventType

RECORD_PREFIX = "ATT"

LATE_IN = "LATE"
MISSING_IN = "MISSIN"
MISSING_OUT = "MISSOUT"
UNDERTIME = "UNDER"
MISSING_BREAK = "NOBREAK"
UNTERMINATED_BREAK = "NB-END"
EXTENDED_BREAK = "EXTBREAK"
OUTSIDE_FENCE = "FENCE"

_DOUBLE_LOG_PREFIXES = {
    TimeEventType.CLOCK_IN: "DL-IN",
    TimeEventType.CLOCK_OUT: "DL-OUT",
}


def record_id(assignment_id: str) -> str:
    return f"{RECORD_PREFIX}-{assignment_id}"


def exception_id(rule: str, key: str) -> str:
    """``EX-<rule>-<key>`` where key is an assignment id or event id."""
    return f"EX-{rule}-{key}"


def double_log_id(event_type: TimeEventType, event_id: str) -> str:
    return exception_id(_DOUBLE_LOG_PREFIXES[event_type], event_id)
