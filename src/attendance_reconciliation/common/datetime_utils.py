from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Wall clock, always timezone-aware (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    """Virtual clock for batch replays and tests."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str) -> time:
    """Parse an ``HH:MM`` template string, failing fast on malformed input."""
    v = (value or "").strip()
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time of day (HH:MM): {value!r}")


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def whole_minutes(start: datetime, end: datetime) -> int:
    """Floor of (end - start) in minutes."""
    return int((end - start).total_seconds() // 60)


def started_minutes(start: datetime, end: datetime) -> int:
    """Ceiling of (end - start) in minutes: any part of a minute counts."""
    return math.ceil((end - start).total_seconds() / 60)


def get_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name!r}")


def local_date(value: datetime, tz: tzinfo) -> date:
    """Calendar date of an aware timestamp as seen in ``tz``."""
    return value.astimezone(tz).date()
