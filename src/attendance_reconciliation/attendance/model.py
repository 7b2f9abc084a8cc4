from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceTag, RecordStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Reconciled per-employee, per-assignment summary of one working day.

    Recomputed on every run; only ``status`` is layered on from outside.
    """

    record_id: str
    assignment_id: str
    employee_id: str
    work_date: date
    scheduled_start: Optional[datetime]
    scheduled_end: Optional[datetime]
    shift_name: str
    first_in: Optional[datetime]
    last_out: Optional[datetime]
    total_work_minutes: int = 0
    break_minutes: int = 0
    overtime_minutes: int = 0
    exceptions: tuple[AttendanceTag, ...] = ()
    has_manual_entry: bool = False
    status: RecordStatus = RecordStatus.PENDING
