"""Daily record builder.

Schedule-driven: exactly one record per shift assignment, events without an
assignment never produce a record. Tags here are computed independently of
the exception rule set; both outputs are consumed separately downstream.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Mapping, Optional

from ..common.datetime_utils import whole_minutes
from ..common.ids import record_id
from ..core.constants import UNKNOWN_SHIFT_NAME
from ..events.sequencer import DayEvents
from ..shifts.model import ShiftAssignment, ShiftTemplate
from ..shifts.resolver import resolve_schedule
from .factory import RecordTagFactory
from .model import AttendanceRecord
from .strategies.base import TagContext


def worked_minutes(first_in: Optional[datetime], last_out: Optional[datetime], template: Optional[ShiftTemplate]) -> int:
    """Single span first-in to last-out minus the nominal break, not below 0."""
    if first_in is None or last_out is None:
        return 0
    minutes = whole_minutes(first_in, last_out)
    if template is not None:
        minutes -= int(template.break_minutes or 0)
    return max(minutes, 0)


def observed_break_minutes(day: DayEvents) -> int:
    start, end = day.first_start_break, day.first_end_break
    if start is None or end is None or end.timestamp < start.timestamp:
        return 0
    return whole_minutes(start.timestamp, end.timestamp)


class DailyRecordBuilder:
    def __init__(self, *, tz: tzinfo, tag_factory: RecordTagFactory | None = None):
        self._tz = tz
        self._tags = tag_factory or RecordTagFactory()

    def build(
        self,
        assignment: ShiftAssignment,
        templates: Mapping[str, ShiftTemplate],
        day: DayEvents,
        *,
        now: datetime,
    ) -> AttendanceRecord:
        template = templates.get(assignment.shift_template_id)
        window = resolve_schedule(assignment, template, self._tz)

        first_in_event = day.first_clock_in
        last_out_event = day.last_clock_out
        first_in = first_in_event.timestamp if first_in_event else None
        last_out = last_out_event.timestamp if last_out_event else None

        tags: tuple = ()
        if window.is_scheduled:
            ctx = TagContext(window=window, template=template, first_in=first_in, last_out=last_out, now=now)
            tags = self._tags.tags_for(ctx)

        return AttendanceRecord(
            record_id=record_id(assignment.assignment_id),
            assignment_id=assignment.assignment_id,
            employee_id=assignment.employee_id,
            work_date=assignment.work_date,
            scheduled_start=window.start,
            scheduled_end=window.end,
            shift_name=template.name if template else UNKNOWN_SHIFT_NAME,
            first_in=first_in,
            last_out=last_out,
            total_work_minutes=worked_minutes(first_in, last_out, template),
            break_minutes=observed_break_minutes(day),
            exceptions=tags,
            has_manual_entry=day.has_manual_entry,
        )
