from __future__ import annotations

from ...core.enums import AttendanceTag
from .base import RecordTagStrategy, TagContext


class MissingOutStrategy(RecordTagStrategy):
    tag = AttendanceTag.MISSING_OUT

    def applies(self, ctx: TagContext) -> bool:
        return ctx.first_in is not None and ctx.last_out is None and ctx.shift_over
