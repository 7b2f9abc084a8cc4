from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from ..core.constants import UNKNOWN_EMPLOYEE_NAME


class EmployeeDirectory(Protocol):
    """Display names only; never consulted by any attendance rule."""

    def get_names(self, employee_ids: Sequence[str]) -> dict[str, str]:
        raise NotImplementedError


def display_name(names: Mapping[str, str], employee_id: str) -> str:
    return names.get(employee_id) or UNKNOWN_EMPLOYEE_NAME
