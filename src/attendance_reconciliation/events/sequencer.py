"""Event sequencing.

Groups raw punches per employee, orders them chronologically and partitions
them by local calendar day. Also runs the duplicate-punch state machine,
which needs the employee's whole ordered stream.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import local_date
from ..core.enums import TimeEventSource, TimeEventType
from .model import TimeEvent


@dataclass(frozen=True)
class DayEvents:
    """One employee's punches on one local calendar day, ascending."""

    employee_id: str
    work_date: date
    events: tuple[TimeEvent, ...] = ()

    def of_type(self, event_type: TimeEventType) -> list[TimeEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def first_of(self, event_type: TimeEventType) -> Optional[TimeEvent]:
        for e in self.events:
            if e.event_type == event_type:
                return e
        return None

    def last_of(self, event_type: TimeEventType) -> Optional[TimeEvent]:
        for e in reversed(self.events):
            if e.event_type == event_type:
                return e
        return None

    @property
    def clock_ins(self) -> list[TimeEvent]:
        return self.of_type(TimeEventType.CLOCK_IN)

    @property
    def clock_outs(self) -> list[TimeEvent]:
        return self.of_type(TimeEventType.CLOCK_OUT)

    @property
    def first_clock_in(self) -> Optional[TimeEvent]:
        return self.first_of(TimeEventType.CLOCK_IN)

    @property
    def first_clock_out(self) -> Optional[TimeEvent]:
        return self.first_of(TimeEventType.CLOCK_OUT)

    @property
    def last_clock_out(self) -> Optional[TimeEvent]:
        return self.last_of(TimeEventType.CLOCK_OUT)

    @property
    def first_start_break(self) -> Optional[TimeEvent]:
        return self.first_of(TimeEventType.START_BREAK)

    @property
    def first_end_break(self) -> Optional[TimeEvent]:
        return self.first_of(TimeEventType.END_BREAK)

    @property
    def has_manual_entry(self) -> bool:
        return any(e.source == TimeEventSource.MANUAL for e in self.events)


def chronological(events: Iterable[TimeEvent]) -> list[TimeEvent]:
    # event_id breaks ties so input order never changes the result.
    return sorted(events, key=lambda e: (e.timestamp, e.event_id))


def scan_double_logs(events: Sequence[TimeEvent]) -> list[TimeEvent]:
    """Events that repeat the previous significant punch type.

    ``events`` must be one employee's stream in chronological order. Break
    events neither trigger nor reset the scan; the tracked type is updated
    after every clock-in/out, so three clock-ins in a row flag two events.
    """

    flagged: list[TimeEvent] = []
    last_significant_type: Optional[TimeEventType] = None
    for event in events:
        if not event.is_significant:
            continue
        if event.event_type == last_significant_type:
            flagged.append(event)
        last_significant_type = event.event_type
    return flagged


class EmployeeTimeline:
    """Chronological event stream of one employee, partitioned by local day."""

    def __init__(self, employee_id: str, events: Iterable[TimeEvent], tz: tzinfo):
        self.employee_id = employee_id
        self.events = tuple(chronological(events))

        by_day: dict[date, list[TimeEvent]] = defaultdict(list)
        for e in self.events:
            by_day[local_date(e.timestamp, tz)].append(e)
        self._days = {d: DayEvents(employee_id, d, tuple(evs)) for d, evs in by_day.items()}

    def day(self, work_date: date) -> DayEvents:
        return self._days.get(work_date) or DayEvents(self.employee_id, work_date)

    @property
    def work_dates(self) -> list[date]:
        return sorted(self._days)

    def double_logs(self) -> list[TimeEvent]:
        return scan_double_logs(self.events)


def sequence_events(events: Iterable[TimeEvent], tz: tzinfo) -> dict[str, EmployeeTimeline]:
    """Partition events by employee id."""

    grouped: dict[str, list[TimeEvent]] = defaultdict(list)
    for e in events:
        grouped[e.employee_id].append(e)
    return {emp_id: EmployeeTimeline(emp_id, evs, tz) for emp_id, evs in grouped.items()}
