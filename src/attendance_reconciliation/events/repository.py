from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import TimeEvent


class TimeEventRepository(Protocol):
    def list_range(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[str] = None,
    ) -> Sequence[TimeEvent]:
        """Events with start <= timestamp < end (append-only store)."""

        raise NotImplementedError

    def last_punches_before(
        self,
        *,
        before: datetime,
        employee_id: Optional[str] = None,
    ) -> Sequence[TimeEvent]:
        """Each employee's latest ClockIn/ClockOut with timestamp < before.

        Seeds the duplicate-punch scan so a range starts from the same state
        a longer range would have reached.
        """

        raise NotImplementedError
