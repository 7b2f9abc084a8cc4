from __future__ import annotations

from datetime import timedelta

from ...core.enums import AttendanceTag
from .base import RecordTagStrategy, TagContext


class LateStrategy(RecordTagStrategy):
    """First clock-in after scheduled start plus grace."""

    tag = AttendanceTag.LATE_IN

    def applies(self, ctx: TagContext) -> bool:
        if ctx.first_in is None:
            return False
        threshold = ctx.window.start + timedelta(minutes=ctx.template.grace_period_minutes)
        return ctx.first_in > threshold
