from __future__ import annotations

from datetime import tzinfo

from ...common.datetime_utils import local_date
from ...common.ids import double_log_id
from ...core.enums import ExceptionType, TimeEventType
from ...events.sequencer import EmployeeTimeline
from ..model import ExceptionRecord

_DETAILS = {
    TimeEventType.CLOCK_IN: "Double Clock-In detected.",
    TimeEventType.CLOCK_OUT: "Double Clock-Out detected.",
}


class DoubleLogRule:
    """Duplicate punches across an employee's whole event stream.

    Independent of shift assignments: runs on every employee with events.
    """

    exception_type = ExceptionType.DOUBLE_LOG

    def __init__(self, *, tz: tzinfo):
        self._tz = tz

    def evaluate(self, timeline: EmployeeTimeline) -> list[ExceptionRecord]:
        return [
            ExceptionRecord(
                exception_id=double_log_id(event.event_type, event.event_id),
                employee_id=timeline.employee_id,
                work_date=local_date(event.timestamp, self._tz),
                exception_type=self.exception_type,
                details=_DETAILS[event.event_type],
                source_event_id=event.event_id,
            )
            for event in timeline.double_logs()
        ]
