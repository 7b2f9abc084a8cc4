from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ExceptionStatus, ExceptionType


@dataclass(frozen=True)
class ExceptionRecord:
    """A machine-detected attendance anomaly awaiting human review.

    ``minutes`` carries the integer delta quoted in ``details`` for rules that
    measure one (late-in, undertime, extended break).
    """

    exception_id: str
    employee_id: str
    work_date: date
    exception_type: ExceptionType
    details: str
    status: ExceptionStatus = ExceptionStatus.PENDING
    source_event_id: str = ""
    minutes: Optional[int] = None
