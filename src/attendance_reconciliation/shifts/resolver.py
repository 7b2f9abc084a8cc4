"""Shift calendar resolution.

The only place where time-of-day arithmetic happens. Everything downstream
compares absolute, timezone-aware timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from ..common.datetime_utils import minutes_since_midnight
from .model import NO_SCHEDULE, ScheduledWindow, ShiftAssignment, ShiftTemplate


def is_overnight(template: ShiftTemplate) -> bool:
    return minutes_since_midnight(template.end_time) < minutes_since_midnight(template.start_time)


def resolve_schedule(assignment: ShiftAssignment, template: Optional[ShiftTemplate], tz: tzinfo) -> ScheduledWindow:
    """Absolute (start, end) of the assignment's shift.

    A missing template or the day-off template resolves to an empty window.
    Overnight shifts end on the calendar day after ``assignment.work_date``.
    """

    if template is None or template.is_day_off:
        return NO_SCHEDULE

    start = datetime.combine(assignment.work_date, template.start_time, tzinfo=tz)
    end_date = assignment.work_date
    if is_overnight(template):
        end_date = end_date + timedelta(days=1)
    end = datetime.combine(end_date, template.end_time, tzinfo=tz)
    return ScheduledWindow(start=start, end=end)
