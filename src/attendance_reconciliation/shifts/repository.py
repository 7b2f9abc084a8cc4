from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ShiftAssignment, ShiftTemplate, Site


class ShiftTemplateRepository(Protocol):
    def list_all(self) -> Sequence[ShiftTemplate]:
        raise NotImplementedError


class ShiftAssignmentRepository(Protocol):
    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[ShiftAssignment]:
        """Assignments with start <= work_date <= end."""

        raise NotImplementedError


class SiteRepository(Protocol):
    def list_all(self) -> Sequence[Site]:
        raise NotImplementedError
