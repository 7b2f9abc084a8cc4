from __future__ import annotations

from dataclasses import dataclass

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import RecordTagStrategy, TagContext
from .strategies.late_strategy import LateStrategy
from .strategies.missing_out_strategy import MissingOutStrategy
from .strategies.undertime_strategy import UndertimeStrategy


@dataclass
class RecordTagFactory:
    """Factory Pattern: the ordered chain of tag strategies for daily records."""

    def strategies(self) -> list[RecordTagStrategy]:
        return [LateStrategy(), AbsentStrategy(), UndertimeStrategy(), MissingOutStrategy()]

    def tags_for(self, ctx: TagContext) -> tuple:
        return tuple(s.tag for s in self.strategies() if s.applies(ctx))
