from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TimeEventSource, TimeEventType


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class TimeEvent:
    """A single punch (clock-in/out or break boundary). Never mutated."""

    event_id: str
    employee_id: str
    timestamp: datetime
    event_type: TimeEventType
    source: TimeEventSource = TimeEventSource.DEVICE
    location: Optional[GeoPoint] = None

    @property
    def is_significant(self) -> bool:
        """Clock-in/out events drive the duplicate-punch scan; breaks do not."""
        return self.event_type in (TimeEventType.CLOCK_IN, TimeEventType.CLOCK_OUT)
