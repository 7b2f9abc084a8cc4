from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...common.ids import exception_id
from ...core.enums import ExceptionType
from ...events.model import TimeEvent
from ...events.sequencer import DayEvents
from ...shifts.model import ScheduledWindow, ShiftAssignment, ShiftTemplate, Site
from ..model import ExceptionRecord


@dataclass(frozen=True)
class ShiftContext:
    """Everything a shift rule sees for one working assignment."""

    assignment: ShiftAssignment
    template: ShiftTemplate
    window: ScheduledWindow
    day: DayEvents
    now: datetime
    site: Optional[Site] = None

    @property
    def clock_in(self) -> Optional[TimeEvent]:
        return self.day.first_clock_in

    @property
    def clock_out(self) -> Optional[TimeEvent]:
        return self.day.last_clock_out

    @property
    def shift_over(self) -> bool:
        return self.now > self.window.end


class ShiftRule(ABC):
    """One anomaly check over a single assignment's punches."""

    exception_type: ExceptionType
    code: str

    @abstractmethod
    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        raise NotImplementedError

    def flag(
        self,
        ctx: ShiftContext,
        details: str,
        *,
        source: Optional[TimeEvent] = None,
        minutes: Optional[int] = None,
        code: Optional[str] = None,
        key: Optional[str] = None,
    ) -> ExceptionRecord:
        """Build a Pending exception keyed on the assignment unless ``key`` is given."""
        return ExceptionRecord(
            exception_id=exception_id(code or self.code, key or ctx.assignment.assignment_id),
            employee_id=ctx.assignment.employee_id,
            work_date=ctx.assignment.work_date,
            exception_type=self.exception_type,
            details=details,
            source_event_id=source.event_id if source else "",
            minutes=minutes,
        )
