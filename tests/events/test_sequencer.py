from __future__ import annotations

from datetime import date, datetime, timezone

from attendance_reconciliation.core.enums import TimeEventSource, TimeEventType
from attendance_reconciliation.events.model import TimeEvent
from attendance_reconciliation.events.sequencer import EmployeeTimeline, scan_double_logs, sequence_events

UTC = timezone.utc
IN = TimeEventType.CLOCK_IN
OUT = TimeEventType.CLOCK_OUT
START_BREAK = TimeEventType.START_BREAK
END_BREAK = TimeEventType.END_BREAK


def ev(event_id: str, event_type: TimeEventType, hour: int, minute: int = 0, *, day: int = 2, employee: str = "E1", manual=False):
    return TimeEvent(
        event_id=event_id,
        employee_id=employee,
        timestamp=datetime(2026, 3, day, hour, minute, tzinfo=UTC),
        event_type=event_type,
        source=TimeEventSource.MANUAL if manual else TimeEventSource.DEVICE,
    )


def test_events_are_sorted_and_partitioned_by_day():
    events = [
        ev("e3", OUT, 17, 30),
        ev("e1", IN, 9, 0),
        ev("e4", IN, 8, 55, day=3),
        ev("e2", START_BREAK, 12, 0),
    ]

    timeline = EmployeeTimeline("E1", events, UTC)

    assert [e.event_id for e in timeline.events] == ["e1", "e2", "e3", "e4"]
    assert timeline.work_dates == [date(2026, 3, 2), date(2026, 3, 3)]
    assert [e.event_id for e in timeline.day(date(2026, 3, 2)).events] == ["e1", "e2", "e3"]


def test_day_views_pick_first_in_and_last_out():
    events = [
        ev("in1", IN, 9, 0),
        ev("sb1", START_BREAK, 12, 0),
        ev("eb1", END_BREAK, 12, 30),
        ev("sb2", START_BREAK, 15, 0),
        ev("out1", OUT, 16, 0),
        ev("in2", IN, 16, 10),
        ev("out2", OUT, 18, 0, manual=True),
    ]

    day = EmployeeTimeline("E1", events, UTC).day(date(2026, 3, 2))

    assert day.first_clock_in.event_id == "in1"
    assert day.last_clock_out.event_id == "out2"
    assert day.first_start_break.event_id == "sb1"
    assert day.first_end_break.event_id == "eb1"
    assert [e.event_id for e in day.clock_ins] == ["in1", "in2"]
    assert [e.event_id for e in day.clock_outs] == ["out1", "out2"]
    assert day.has_manual_entry


def test_unknown_day_is_empty():
    day = EmployeeTimeline("E1", [ev("e1", IN, 9)], UTC).day(date(2026, 3, 9))

    assert day.events == ()
    assert day.first_clock_in is None
    assert not day.has_manual_entry


def test_double_log_in_in_out_out_flags_second_of_each():
    events = [ev("a", IN, 9), ev("b", IN, 9, 5), ev("c", OUT, 17), ev("d", OUT, 17, 5)]

    flagged = scan_double_logs(events)

    assert [e.event_id for e in flagged] == ["b", "d"]


def test_three_consecutive_clock_ins_flag_two():
    events = [ev("a", IN, 9), ev("b", IN, 9, 1), ev("c", IN, 9, 2)]

    assert [e.event_id for e in scan_double_logs(events)] == ["b", "c"]


def test_break_events_do_not_reset_the_scan():
    events = [ev("a", IN, 9), ev("b", START_BREAK, 12), ev("c", END_BREAK, 13), ev("d", IN, 13, 1)]

    assert [e.event_id for e in scan_double_logs(events)] == ["d"]


def test_alternating_punches_are_clean():
    events = [ev("a", IN, 9), ev("b", OUT, 12), ev("c", IN, 13), ev("d", OUT, 18)]

    assert scan_double_logs(events) == []


def test_scan_spans_calendar_days():
    # Forgotten clock-out yesterday: today's clock-in repeats the last punch.
    events = [ev("a", IN, 9, day=2), ev("b", IN, 9, day=3)]

    timeline = EmployeeTimeline("E1", events, UTC)

    assert [e.event_id for e in timeline.double_logs()] == ["b"]


def test_sequence_events_groups_by_employee():
    events = [ev("a", IN, 9, employee="E2"), ev("b", IN, 9, employee="E1"), ev("c", OUT, 17, employee="E2")]

    timelines = sequence_events(events, UTC)

    assert set(timelines) == {"E1", "E2"}
    assert [e.event_id for e in timelines["E2"].events] == ["a", "c"]


def test_equal_timestamps_order_by_event_id():
    events = [ev("b", OUT, 9, 0), ev("a", IN, 9, 0)]

    timeline = EmployeeTimeline("E1", events, UTC)

    assert [e.event_id for e in timeline.events] == ["a", "b"]
