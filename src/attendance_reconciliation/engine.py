"""Batch reconciliation engine.

``f(assignments, events, templates) -> (records, exceptions)`` with no I/O and
no shared mutable state. Work is partitioned by employee: each partition owns
one employee's full chronological event stream and runs on its own worker,
then results are fanned back in and put into a deterministic order.

The wall clock is read exactly once per run, through the injected ``Clock``.
Only absent / missing-in / missing-out detection depends on it.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterable, Mapping, Sequence

from .anomalies.model import ExceptionRecord
from .anomalies.rule_set import ExceptionRuleSet, order_exceptions
from .anomalies.rules.base import ShiftRule
from .attendance.builder import DailyRecordBuilder
from .attendance.factory import RecordTagFactory
from .attendance.model import AttendanceRecord
from .common.datetime_utils import Clock, SystemClock
from .common.validators import require_aware
from .core.constants import DEFAULT_MAX_WORKERS
from .core.logging import get_logger
from .events.model import TimeEvent
from .events.sequencer import EmployeeTimeline
from .shifts.model import ShiftAssignment, ShiftTemplate, Site

logger = get_logger("engine")


@dataclass(frozen=True)
class ReconciliationResult:
    records: tuple[AttendanceRecord, ...] = ()
    exceptions: tuple[ExceptionRecord, ...] = ()


@dataclass
class EmployeePartition:
    employee_id: str
    # (input position, assignment) so records can be put back in input order.
    assignments: list[tuple[int, ShiftAssignment]] = field(default_factory=list)
    events: list[TimeEvent] = field(default_factory=list)


def partition_by_employee(
    assignments: Sequence[ShiftAssignment],
    events: Iterable[TimeEvent],
) -> list[EmployeePartition]:
    parts: dict[str, EmployeePartition] = {}
    for idx, a in enumerate(assignments):
        parts.setdefault(a.employee_id, EmployeePartition(a.employee_id)).assignments.append((idx, a))
    for e in events:
        parts.setdefault(e.employee_id, EmployeePartition(e.employee_id)).events.append(e)
    return [parts[k] for k in sorted(parts)]


class ReconciliationEngine:
    def __init__(
        self,
        *,
        tz: tzinfo,
        clock: Clock | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        tag_factory: RecordTagFactory | None = None,
        rules: Sequence[ShiftRule] | None = None,
    ):
        self._tz = tz
        self._clock = clock or SystemClock()
        self._max_workers = max(1, int(max_workers))
        self._builder = DailyRecordBuilder(tz=tz, tag_factory=tag_factory)
        self._rule_set = ExceptionRuleSet(tz=tz, rules=rules)

    def run(
        self,
        assignments: Sequence[ShiftAssignment],
        events: Sequence[TimeEvent],
        templates: Sequence[ShiftTemplate],
        sites: Sequence[Site] = (),
    ) -> ReconciliationResult:
        for e in events:
            require_aware(e.timestamp, f"timestamp of event {e.event_id}")

        now = self._clock.now()
        template_map = {t.template_id: t for t in templates}
        site_map = {s.site_id: s for s in sites}
        partitions = partition_by_employee(assignments, events)

        def work(part: EmployeePartition):
            return self._run_partition(part, template_map, site_map, now)

        if self._max_workers == 1 or len(partitions) <= 1:
            results = [work(p) for p in partitions]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                results = list(pool.map(work, partitions))

        indexed: list[tuple[int, AttendanceRecord]] = []
        exceptions: list[ExceptionRecord] = []
        for part_records, part_exceptions in results:
            indexed.extend(part_records)
            exceptions.extend(part_exceptions)
        indexed.sort(key=lambda pair: pair[0])

        result = ReconciliationResult(
            records=tuple(r for _, r in indexed),
            exceptions=tuple(order_exceptions(exceptions)),
        )
        logger.info(
            "reconciled %d assignment(s), %d event(s) for %d employee(s): %d record(s), %d exception(s)",
            len(assignments),
            len(events),
            len(partitions),
            len(result.records),
            len(result.exceptions),
        )
        return result

    def _run_partition(
        self,
        part: EmployeePartition,
        templates: Mapping[str, ShiftTemplate],
        sites: Mapping[str, Site],
        now: datetime,
    ) -> tuple[list[tuple[int, AttendanceRecord]], list[ExceptionRecord]]:
        timeline = EmployeeTimeline(part.employee_id, part.events, self._tz)

        records = [
            (idx, self._builder.build(a, templates, timeline.day(a.work_date), now=now))
            for idx, a in part.assignments
        ]
        exceptions = self._rule_set.evaluate(
            assignments=[a for _, a in part.assignments],
            templates=templates,
            timelines={part.employee_id: timeline},
            now=now,
            sites=sites,
        )
        return records, exceptions
