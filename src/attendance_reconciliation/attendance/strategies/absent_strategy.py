from __future__ import annotations

from ...core.enums import AttendanceTag
from .base import RecordTagStrategy, TagContext


class AbsentStrategy(RecordTagStrategy):
    """No clock-in at all and the shift is already over."""

    tag = AttendanceTag.ABSENT

    def applies(self, ctx: TagContext) -> bool:
        return ctx.first_in is None and ctx.shift_over
