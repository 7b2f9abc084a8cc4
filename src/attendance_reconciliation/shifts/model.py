from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DAY_OFF_TEMPLATE_NAME


@dataclass(frozen=True)
class ShiftTemplate:
    """Reusable schedule definition: working hours, break allowance, grace period."""

    template_id: str
    name: str
    start_time: time
    end_time: time
    break_minutes: int = 0
    grace_period_minutes: int = 0

    @property
    def is_day_off(self) -> bool:
        return self.name == DAY_OFF_TEMPLATE_NAME


@dataclass(frozen=True)
class ShiftAssignment:
    """Binding of one employee to a shift template on a calendar date."""

    assignment_id: str
    employee_id: str
    work_date: date
    shift_template_id: str
    location_id: Optional[str] = None


@dataclass(frozen=True)
class Site:
    """Work location with a geofence radius."""

    site_id: str
    name: str
    latitude: float
    longitude: float
    radius_meters: float


@dataclass(frozen=True)
class ScheduledWindow:
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def is_scheduled(self) -> bool:
        return self.start is not None and self.end is not None


NO_SCHEDULE = ScheduledWindow()
