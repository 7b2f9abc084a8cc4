from __future__ import annotations

from ...core.enums import AttendanceTag
from .base import RecordTagStrategy, TagContext


class UndertimeStrategy(RecordTagStrategy):
    """Last clock-out before scheduled end (no tolerance on the record path)."""

    tag = AttendanceTag.UNDERTIME

    def applies(self, ctx: TagContext) -> bool:
        return ctx.last_out is not None and ctx.last_out < ctx.window.end
