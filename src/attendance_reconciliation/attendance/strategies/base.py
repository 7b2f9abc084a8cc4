from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceTag
from ...shifts.model import ScheduledWindow, ShiftTemplate


@dataclass(frozen=True)
class TagContext:
    """Inputs a tag strategy may look at. ``window`` is always scheduled."""

    window: ScheduledWindow
    template: ShiftTemplate
    first_in: Optional[datetime]
    last_out: Optional[datetime]
    now: datetime

    @property
    def shift_over(self) -> bool:
        return self.now > self.window.end


class RecordTagStrategy(ABC):
    """Strategy Pattern: one schedule-deviation check on a daily record."""

    tag: AttendanceTag

    @abstractmethod
    def applies(self, ctx: TagContext) -> bool:
        raise NotImplementedError
