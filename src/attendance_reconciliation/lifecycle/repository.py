from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ExceptionStatus, RecordStatus


class StatusRepository(Protocol):
    """External store of review annotations layered on top of engine output."""

    def get_record_statuses(self, record_ids: Sequence[str]) -> dict[str, RecordStatus]:
        raise NotImplementedError

    def get_exception_statuses(self, exception_ids: Sequence[str]) -> dict[str, ExceptionStatus]:
        raise NotImplementedError

    def set_record_status(self, *, record_id: str, status: RecordStatus, updated_by: Optional[str] = None) -> None:
        raise NotImplementedError

    def set_exception_status(
        self,
        *,
        exception_id: str,
        status: ExceptionStatus,
        updated_by: Optional[str] = None,
    ) -> None:
        raise NotImplementedError
