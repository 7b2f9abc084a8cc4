from __future__ import annotations

from datetime import timedelta

from ...common import ids
from ...common.datetime_utils import started_minutes
from ...core.constants import BREAK_TOLERANCE_MINUTES
from ...core.enums import ExceptionType
from ..model import ExceptionRecord
from .base import ShiftContext, ShiftRule


class MissingBreakRule(ShiftRule):
    """Full shift worked with a break allowance but no break punches at all,
    or a break that was started and never ended.

    Only the first StartBreak/EndBreak pair of the day is looked at.
    """

    exception_type = ExceptionType.MISSING_BREAK
    code = ids.MISSING_BREAK

    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        allowance = int(ctx.template.break_minutes or 0)
        start, end = ctx.day.first_start_break, ctx.day.first_end_break

        if start is None and end is None:
            if ctx.clock_in is not None and ctx.clock_out is not None and allowance > 0:
                details = f"No break logs detected for shift with {allowance}m break."
                return [self.flag(ctx, details, source=ctx.clock_in)]
            return []

        if start is not None and end is None:
            return [
                self.flag(
                    ctx,
                    "Break started but no end time logged.",
                    source=start,
                    code=ids.UNTERMINATED_BREAK,
                )
            ]
        return []


class ExtendedBreakRule(ShiftRule):
    exception_type = ExceptionType.EXTENDED_BREAK
    code = ids.EXTENDED_BREAK

    def evaluate(self, ctx: ShiftContext) -> list[ExceptionRecord]:
        start, end = ctx.day.first_start_break, ctx.day.first_end_break
        if start is None or end is None:
            return []

        allowance = int(ctx.template.break_minutes or 0)
        limit = timedelta(minutes=allowance + BREAK_TOLERANCE_MINUTES)
        if end.timestamp - start.timestamp <= limit:
            return []

        taken = started_minutes(start.timestamp, end.timestamp)
        details = f"Break took {taken} mins (Allowed: {allowance}m)."
        return [self.flag(ctx, details, source=end, minutes=taken)]
