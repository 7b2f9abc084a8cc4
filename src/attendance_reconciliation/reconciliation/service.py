from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

from ..anomalies.model import ExceptionRecord
from ..attendance.model import AttendanceRecord
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from ..directory.repository import EmployeeDirectory
from ..engine import ReconciliationEngine
from ..events.repository import TimeEventRepository
from ..lifecycle.tracker import LifecycleTracker
from ..reports.service import ReportData, daily_time_summary, exception_rows
from ..shifts.repository import ShiftAssignmentRepository, ShiftTemplateRepository, SiteRepository

logger = get_logger("reconciliation")


@dataclass(frozen=True)
class ReconciliationReport:
    start: date
    end: date
    records: list[AttendanceRecord]
    exceptions: list[ExceptionRecord]
    names: dict[str, str]

    def exception_rows(self) -> list[dict]:
        return exception_rows(self.exceptions, self.names)

    def daily_summary(self) -> ReportData:
        return daily_time_summary(self.records, self.names)


class ReconciliationService:
    """Loads inputs from the stores, runs the engine, layers review status on top."""

    def __init__(
        self,
        engine: ReconciliationEngine,
        templates: ShiftTemplateRepository,
        assignments: ShiftAssignmentRepository,
        events: TimeEventRepository,
        tracker: LifecycleTracker,
        *,
        tz: tzinfo,
        sites: SiteRepository | None = None,
        directory: EmployeeDirectory | None = None,
    ):
        self._engine = engine
        self._templates = templates
        self._assignments = assignments
        self._events = events
        self._tracker = tracker
        self._tz = tz
        self._sites = sites
        self._directory = directory

    def reconcile(self, *, start: date, end: date, employee_id: Optional[str] = None) -> ReconciliationReport:
        if end < start:
            raise ValidationError("End date must not be before start date")

        assignments = self._assignments.list_range(start=start, end=end, employee_id=employee_id)
        range_start = datetime.combine(start, time.min, tzinfo=self._tz)
        events = self._events.list_range(
            start=range_start,
            end=datetime.combine(end + timedelta(days=1), time.min, tzinfo=self._tz),
            employee_id=employee_id,
        )
        # Seeds the cross-day duplicate-punch scan with each employee's last
        # ClockIn/ClockOut before the range.
        carried = self._events.last_punches_before(before=range_start, employee_id=employee_id)
        templates = self._templates.list_all()
        sites = self._sites.list_all() if self._sites else ()

        result = self._engine.run(assignments, [*carried, *events], templates, sites)
        in_range = [e for e in result.exceptions if start <= e.work_date <= end]
        records, exceptions = self._tracker.annotate(result.records, in_range)

        employee_ids = sorted({r.employee_id for r in records} | {e.employee_id for e in exceptions})
        names = self._directory.get_names(employee_ids) if self._directory else {}

        logger.info("reconciliation %s..%s employee=%s done", start, end, employee_id or "*")
        return ReconciliationReport(start=start, end=end, records=records, exceptions=exceptions, names=names)
