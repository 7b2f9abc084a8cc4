from __future__ import annotations

from datetime import datetime, time, timezone

from attendance_reconciliation.attendance.factory import RecordTagFactory
from attendance_reconciliation.attendance.strategies.absent_strategy import AbsentStrategy
from attendance_reconciliation.attendance.strategies.base import TagContext
from attendance_reconciliation.attendance.strategies.late_strategy import LateStrategy
from attendance_reconciliation.attendance.strategies.missing_out_strategy import MissingOutStrategy
from attendance_reconciliation.attendance.strategies.undertime_strategy import UndertimeStrategy
from attendance_reconciliation.core.enums import AttendanceTag
from attendance_reconciliation.shifts.model import ScheduledWindow, ShiftTemplate

UTC = timezone.utc
TEMPLATE = ShiftTemplate(template_id="T1", name="Day", start_time=time(9, 0), end_time=time(17, 0), grace_period_minutes=5)
WINDOW = ScheduledWindow(start=datetime(2026, 3, 2, 9, 0, tzinfo=UTC), end=datetime(2026, 3, 2, 17, 0, tzinfo=UTC))


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute, tzinfo=UTC)


def ctx(first_in=None, last_out=None, now=None) -> TagContext:
    return TagContext(window=WINDOW, template=TEMPLATE, first_in=first_in, last_out=last_out, now=now or at(20))


def test_factory_strategy_order():
    names = [type(s).__name__ for s in RecordTagFactory().strategies()]

    assert names == ["LateStrategy", "AbsentStrategy", "UndertimeStrategy", "MissingOutStrategy"]


def test_late_respects_grace_boundary():
    assert not LateStrategy().applies(ctx(first_in=at(9, 5), last_out=at(17)))
    assert LateStrategy().applies(ctx(first_in=at(9, 6), last_out=at(17)))


def test_absent_needs_finished_shift():
    assert AbsentStrategy().applies(ctx(now=at(17, 1)))
    assert not AbsentStrategy().applies(ctx(now=at(17, 0)))


def test_undertime_is_any_early_out():
    assert UndertimeStrategy().applies(ctx(first_in=at(9), last_out=at(16, 59)))
    assert not UndertimeStrategy().applies(ctx(first_in=at(9), last_out=at(17)))


def test_missing_out_needs_clock_in():
    assert MissingOutStrategy().applies(ctx(first_in=at(9)))
    assert not MissingOutStrategy().applies(ctx())


def test_tags_for_combines_in_factory_order():
    tags = RecordTagFactory().tags_for(ctx(first_in=at(9, 30), last_out=at(16, 0)))

    assert tags == (AttendanceTag.LATE_IN, AttendanceTag.UNDERTIME)
