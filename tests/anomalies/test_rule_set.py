from __future__ import annotations

from datetime import date, datetime, time, timezone

from attendance_reconciliation.anomalies.rule_set import ExceptionRuleSet, order_exceptions
from attendance_reconciliation.core.enums import ExceptionStatus, ExceptionType, TimeEventType
from attendance_reconciliation.events.model import GeoPoint, TimeEvent
from attendance_reconciliation.events.sequencer import sequence_events
from attendance_reconciliation.shifts.model import ShiftAssignment, ShiftTemplate, Site

UTC = timezone.utc
WORK_DATE = date(2026, 3, 2)

IN = TimeEventType.CLOCK_IN
OUT = TimeEventType.CLOCK_OUT
START_BREAK = TimeEventType.START_BREAK
END_BREAK = TimeEventType.END_BREAK

DAY_SHIFT = ShiftTemplate(
    template_id="T-DAY",
    name="Day",
    start_time=time(9, 0),
    end_time=time(18, 0),
    break_minutes=60,
    grace_period_minutes=10,
)
NO_BREAK_SHIFT = ShiftTemplate(template_id="T-SHORT", name="Short", start_time=time(9, 0), end_time=time(13, 0))
DAY_OFF = ShiftTemplate(template_id="T-OFF", name="OFF", start_time=time(0, 0), end_time=time(0, 0))
MIDNIGHT = ShiftTemplate(template_id="T-MID", name="Graveyard", start_time=time(0, 0), end_time=time(8, 0))
TEMPLATES = {t.template_id: t for t in (DAY_SHIFT, NO_BREAK_SHIFT, DAY_OFF, MIDNIGHT)}

OFFICE = Site(site_id="S1", name="HQ", latitude=10.0, longitude=106.0, radius_meters=100)


def at(hour: int, minute: int = 0, day: int = 2, second: int = 0) -> datetime:
    return datetime(2026, 3, day, hour, minute, second, tzinfo=UTC)


def ev(event_id, event_type, hour, minute=0, *, second=0, location=None):
    return TimeEvent(
        event_id=event_id,
        employee_id="E1",
        timestamp=at(hour, minute, second=second),
        event_type=event_type,
        location=location,
    )


def assignment(template_id: str = "T-DAY", location_id=None) -> ShiftAssignment:
    return ShiftAssignment(
        assignment_id="A1",
        employee_id="E1",
        work_date=WORK_DATE,
        shift_template_id=template_id,
        location_id=location_id,
    )


def evaluate(events, *, template_id="T-DAY", now=None, location_id=None):
    return ExceptionRuleSet(tz=UTC).evaluate(
        assignments=[assignment(template_id, location_id)],
        templates=TEMPLATES,
        timelines=sequence_events(events, UTC),
        now=now or at(23, 0),
        sites={OFFICE.site_id: OFFICE},
    )


def types(exceptions):
    return [e.exception_type for e in exceptions]


def test_extended_break_and_early_leave_day():
    found = evaluate(
        [
            ev("in", IN, 9, 7),
            ev("sb", START_BREAK, 12, 0),
            ev("eb", END_BREAK, 13, 10),
            ev("out", OUT, 17, 30),
        ]
    )

    assert types(found) == [ExceptionType.UNDERTIME, ExceptionType.EXTENDED_BREAK]
    undertime, extended = found
    assert undertime.exception_id == "EX-UNDER-A1"
    assert undertime.minutes == 30
    assert undertime.details == "Clocked out 30 minutes early."
    assert undertime.source_event_id == "out"
    assert extended.exception_id == "EX-EXTBREAK-A1"
    assert extended.minutes == 70
    assert extended.details == "Break took 70 mins (Allowed: 60m)."
    assert extended.source_event_id == "eb"
    assert all(e.status == ExceptionStatus.PENDING for e in found)


def test_clock_in_at_grace_boundary_is_on_time():
    found = evaluate([ev("in", IN, 9, 10), ev("out", OUT, 18, 0), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13)])

    assert found == []


def test_clock_in_one_minute_past_grace_is_late():
    found = evaluate([ev("in", IN, 9, 11), ev("out", OUT, 18, 0), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13)])

    assert types(found) == [ExceptionType.LATE_IN]
    assert found[0].exception_id == "EX-LATE-A1"
    assert found[0].minutes == 1
    assert "11 minutes after scheduled start" in found[0].details


def test_clock_in_seconds_past_grace_counts_a_full_minute():
    found = evaluate(
        [ev("in", IN, 9, 10, second=5), ev("out", OUT, 18, 0), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13)]
    )

    assert types(found) == [ExceptionType.LATE_IN]
    assert found[0].minutes == 1
    assert found[0].details.startswith("Clocked in 1 minute(s) late")


def test_break_within_tolerance_is_not_extended():
    found = evaluate([ev("in", IN, 9), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13, 5), ev("out", OUT, 18)])

    assert found == []


def test_break_one_minute_over_tolerance_is_extended():
    found = evaluate([ev("in", IN, 9), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13, 6), ev("out", OUT, 18)])

    assert types(found) == [ExceptionType.EXTENDED_BREAK]
    assert found[0].minutes == 66


def test_partial_minute_over_tolerance_is_reported_rounded_up():
    found = evaluate(
        [ev("in", IN, 9), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13, 5, second=30), ev("out", OUT, 18)]
    )

    assert types(found) == [ExceptionType.EXTENDED_BREAK]
    assert found[0].minutes == 66
    assert found[0].details == "Break took 66 mins (Allowed: 60m)."


def test_undertime_ignores_one_minute_drift():
    assert evaluate([ev("in", IN, 9), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13), ev("out", OUT, 17, 59)]) == []

    found = evaluate([ev("in", IN, 9), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13), ev("out", OUT, 17, 58)])
    assert types(found) == [ExceptionType.UNDERTIME]
    assert found[0].minutes == 2


def test_undertime_uses_last_clock_out_of_the_day():
    found = evaluate(
        [
            ev("in1", IN, 9),
            ev("out1", OUT, 12),
            ev("in2", IN, 13),
            ev("out2", OUT, 18),
            ev("sb", START_BREAK, 15),
            ev("eb", END_BREAK, 15, 30),
        ]
    )

    assert found == []


def test_missing_in_waits_for_shift_end():
    assert evaluate([], now=at(17, 0)) == []

    found = evaluate([], now=at(18, 1))
    assert types(found) == [ExceptionType.MISSING_IN]
    assert found[0].exception_id == "EX-MISSIN-A1"
    assert found[0].source_event_id == ""


def test_missing_out_after_shift_end():
    found = evaluate([ev("in", IN, 9)], now=at(19, 0))

    assert types(found) == [ExceptionType.MISSING_OUT]
    assert found[0].exception_id == "EX-MISSOUT-A1"
    assert found[0].source_event_id == "in"


def test_full_shift_without_break_punches():
    found = evaluate([ev("in", IN, 9), ev("out", OUT, 18)])

    assert types(found) == [ExceptionType.MISSING_BREAK]
    assert found[0].exception_id == "EX-NOBREAK-A1"
    assert found[0].source_event_id == "in"


def test_no_break_allowance_needs_no_break_punches():
    assert evaluate([ev("in", IN, 9), ev("out", OUT, 13)], template_id="T-SHORT") == []


def test_unterminated_break():
    found = evaluate([ev("in", IN, 9), ev("sb", START_BREAK, 12), ev("out", OUT, 18)])

    assert types(found) == [ExceptionType.MISSING_BREAK]
    assert found[0].exception_id == "EX-NB-END-A1"
    assert found[0].details == "Break started but no end time logged."
    assert found[0].source_event_id == "sb"


def test_day_off_only_reports_double_logs():
    found = evaluate([ev("in1", IN, 9), ev("in2", IN, 9, 3)], template_id="T-OFF")

    assert types(found) == [ExceptionType.DOUBLE_LOG]
    assert found[0].exception_id == "EX-DL-IN-in2"
    assert found[0].details == "Double Clock-In detected."


def test_midnight_start_template_is_skipped():
    assert evaluate([], template_id="T-MID") == []


def test_missing_template_is_skipped():
    assert evaluate([], template_id="T-GONE") == []


def test_double_log_sorts_before_shift_rules():
    found = evaluate(
        [
            ev("in", IN, 9, 20),
            ev("sb", START_BREAK, 12),
            ev("eb", END_BREAK, 13),
            ev("out1", OUT, 18),
            ev("out2", OUT, 18, 2),
        ]
    )

    assert types(found) == [ExceptionType.DOUBLE_LOG, ExceptionType.LATE_IN]
    assert found[0].exception_id == "EX-DL-OUT-out2"


def test_punch_outside_site_radius():
    inside = GeoPoint(10.0, 106.0)
    outside = GeoPoint(10.01, 106.0)
    found = evaluate(
        [
            ev("in", IN, 9, location=outside),
            ev("sb", START_BREAK, 12),
            ev("eb", END_BREAK, 13),
            ev("out", OUT, 18, location=inside),
        ],
        location_id="S1",
    )

    assert types(found) == [ExceptionType.OUTSIDE_FENCE]
    assert found[0].exception_id == "EX-FENCE-in"
    assert found[0].source_event_id == "in"


def test_unknown_site_skips_fence_check():
    found = evaluate(
        [ev("in", IN, 9, location=GeoPoint(11.0, 107.0)), ev("sb", START_BREAK, 12), ev("eb", END_BREAK, 13), ev("out", OUT, 18)],
        location_id="S-GONE",
    )

    assert found == []


def test_order_exceptions_drops_repeated_ids():
    found = evaluate([ev("in", IN, 9), ev("out", OUT, 18)])

    assert order_exceptions(found + found) == found
