"""Standalone exception rule battery.

Computed directly from assignments, templates and punches, never from the
daily records, so the canonical exception list can be tested in isolation.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Iterable, Mapping, Optional, Sequence

from ..core.constants import MIDNIGHT_START
from ..core.enums import ExceptionType
from ..core.logging import get_logger
from ..events.sequencer import DayEvents, EmployeeTimeline
from ..shifts.model import ShiftAssignment, ShiftTemplate, Site
from ..shifts.resolver import resolve_schedule
from .model import ExceptionRecord
from .rules.base import ShiftContext, ShiftRule
from .rules.break_rules import ExtendedBreakRule, MissingBreakRule
from .rules.double_log_rule import DoubleLogRule
from .rules.fence_rule import OutsideFenceRule
from .rules.punch_rules import LateInRule, MissingInRule, MissingOutRule, UndertimeRule

logger = get_logger("anomalies.rule_set")

TYPE_ORDER = {
    ExceptionType.DOUBLE_LOG: 0,
    ExceptionType.LATE_IN: 1,
    ExceptionType.MISSING_IN: 2,
    ExceptionType.MISSING_OUT: 3,
    ExceptionType.UNDERTIME: 4,
    ExceptionType.MISSING_BREAK: 5,
    ExceptionType.EXTENDED_BREAK: 6,
    ExceptionType.OUTSIDE_FENCE: 7,
}


def default_shift_rules() -> list[ShiftRule]:
    return [
        LateInRule(),
        MissingInRule(),
        MissingOutRule(),
        UndertimeRule(),
        MissingBreakRule(),
        ExtendedBreakRule(),
        OutsideFenceRule(),
    ]


def is_working_template(template: Optional[ShiftTemplate]) -> bool:
    """Missing, day-off and midnight-start templates are treated as non-working."""
    if template is None or template.is_day_off:
        return False
    return template.start_time.strftime("%H:%M") != MIDNIGHT_START


def order_exceptions(exceptions: Iterable[ExceptionRecord]) -> list[ExceptionRecord]:
    """Drop repeated ids (first wins) and sort into the canonical output order."""
    seen: dict[str, ExceptionRecord] = {}
    for ex in exceptions:
        seen.setdefault(ex.exception_id, ex)
    return sorted(
        seen.values(),
        key=lambda ex: (ex.employee_id, ex.work_date, TYPE_ORDER[ex.exception_type], ex.exception_id),
    )


class ExceptionRuleSet:
    def __init__(self, *, tz: tzinfo, rules: Sequence[ShiftRule] | None = None):
        self._tz = tz
        self._rules = list(rules) if rules is not None else default_shift_rules()
        self._double_log = DoubleLogRule(tz=tz)

    def evaluate(
        self,
        *,
        assignments: Sequence[ShiftAssignment],
        templates: Mapping[str, ShiftTemplate],
        timelines: Mapping[str, EmployeeTimeline],
        now: datetime,
        sites: Mapping[str, Site] | None = None,
    ) -> list[ExceptionRecord]:
        sites = sites or {}
        found: list[ExceptionRecord] = []

        for timeline in timelines.values():
            found.extend(self._double_log.evaluate(timeline))

        for assignment in assignments:
            template = templates.get(assignment.shift_template_id)
            if not is_working_template(template):
                logger.debug("skip non-working assignment %s", assignment.assignment_id)
                continue

            timeline = timelines.get(assignment.employee_id)
            day = timeline.day(assignment.work_date) if timeline else DayEvents(assignment.employee_id, assignment.work_date)
            ctx = ShiftContext(
                assignment=assignment,
                template=template,
                window=resolve_schedule(assignment, template, self._tz),
                day=day,
                now=now,
                site=sites.get(assignment.location_id) if assignment.location_id else None,
            )
            for rule in self._rules:
                hits = rule.evaluate(ctx)
                if hits:
                    logger.debug("%s fired %d time(s) for %s", type(rule).__name__, len(hits), assignment.assignment_id)
                found.extend(hits)

        return order_exceptions(found)
