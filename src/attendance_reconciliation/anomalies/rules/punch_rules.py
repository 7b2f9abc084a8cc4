from __future__ import annotations

from datetime import timedelta

from ...common import ids
from ...common.datetime_utils import started_minutes, whole_minutes
from ...core.constants import UNDERTIME_TOLERANCE_MINUTES
from ...core.enums import ExceptionType
from ..model import ExceptionRecord
from .base import ShiftContext, ShiftRule


class LateInRule(ShiftRule):
    exception_type = ExceptionType.LATE_IN
    code = ids.LATE_IN

    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        clock_in = ctx.clock_in
        if clock_in is None:
            return []

        grace = int(ctx.template.grace_period_minutes or 0)
        threshold = ctx.window.start + timedelta(minutes=grace)
        if clock_in.timestamp <= threshold:
            return []

        past_grace = started_minutes(threshold, clock_in.timestamp)
        after_start = started_minutes(ctx.window.start, clock_in.timestamp)
        details = (
            f"Clocked in {past_grace} minute(s) late beyond the {grace}m grace period "
            f"({after_start} minutes after scheduled start)."
        )
        return [self.flag(ctx, details, source=clock_in, minutes=past_grace)]


class MissingInRule(ShiftRule):
    exception_type = ExceptionType.MISSING_IN
    code = ids.MISSING_IN

    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        if ctx.clock_in is not None or not ctx.shift_over:
            return []
        return [self.flag(ctx, "No Clock-In record found for scheduled shift.")]


class MissingOutRule(ShiftRule):
    exception_type = ExceptionType.MISSING_OUT
    code = ids.MISSING_OUT

    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        if ctx.clock_in is None or ctx.clock_out is not None or not ctx.shift_over:
            return []
        return [self.flag(ctx, "Shift ended but no Clock-Out record found.", source=ctx.clock_in)]


class UndertimeRule(ShiftRule):
    exception_type = ExceptionType.UNDERTIME
    code = ids.UNDERTIME

    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        clock_out = ctx.clock_out
        if clock_out is None:
            return []

        # 1 minute buffer absorbs seconds drift on the device clock.
        cutoff = ctx.window.end - timedelta(minutes=UNDERTIME_TOLERANCE_MINUTES)
        if clock_out.timestamp >= cutoff:
            return []

        early = whole_minutes(clock_out.timestamp, ctx.window.end)
        return [self.flag(ctx, f"Clocked out {early} minutes early.", source=clock_out, minutes=early)]
