"""Review lifecycle of exceptions and daily records.

The engine only ever creates records and exceptions at Pending. Every other
state is the result of a reviewer action applied here and stored outside the
engine, then layered back onto fresh engine output by id.

Exception:  Pending -> Acknowledged
Record:     Pending -> Reviewed -> Finalized
            Pending/Reviewed -> Disputed -> Reviewed
"""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Optional, Sequence

from ..anomalies.model import ExceptionRecord
from ..attendance.model import AttendanceRecord
from ..core.enums import ExceptionStatus, RecordStatus, Role
from ..core.exceptions import AuthorizationError, LifecycleError
from ..core.logging import get_logger
from .repository import StatusRepository

logger = get_logger("lifecycle")

REVIEW_ROLES = frozenset({Role.ADMIN, Role.REVIEWER})

RECORD_TRANSITIONS: dict[RecordStatus, frozenset[RecordStatus]] = {
    RecordStatus.PENDING: frozenset({RecordStatus.REVIEWED, RecordStatus.DISPUTED}),
    RecordStatus.REVIEWED: frozenset({RecordStatus.FINALIZED, RecordStatus.DISPUTED}),
    RecordStatus.DISPUTED: frozenset({RecordStatus.REVIEWED}),
    RecordStatus.FINALIZED: frozenset(),
}

EXCEPTION_TRANSITIONS: dict[ExceptionStatus, frozenset[ExceptionStatus]] = {
    ExceptionStatus.PENDING: frozenset({ExceptionStatus.ACKNOWLEDGED}),
    ExceptionStatus.ACKNOWLEDGED: frozenset(),
}


def can_transition_record(current: RecordStatus, target: RecordStatus) -> bool:
    return target in RECORD_TRANSITIONS[current]


def can_acknowledge(current: ExceptionStatus) -> bool:
    return ExceptionStatus.ACKNOWLEDGED in EXCEPTION_TRANSITIONS[current]


def transition_record(record: AttendanceRecord, target: RecordStatus) -> AttendanceRecord:
    if not can_transition_record(record.status, target):
        raise LifecycleError(record.status, target)
    return replace(record, status=target)


def acknowledge_exception(exception: ExceptionRecord) -> ExceptionRecord:
    if not can_acknowledge(exception.status):
        raise LifecycleError(exception.status, ExceptionStatus.ACKNOWLEDGED)
    return replace(exception, status=ExceptionStatus.ACKNOWLEDGED)


def apply_annotations(
    records: Sequence[AttendanceRecord],
    exceptions: Sequence[ExceptionRecord],
    *,
    record_statuses: Mapping[str, RecordStatus],
    exception_statuses: Mapping[str, ExceptionStatus],
) -> tuple[list[AttendanceRecord], list[ExceptionRecord]]:
    """Copy stored statuses onto freshly computed output, matched by id."""

    out_records = [
        replace(r, status=record_statuses[r.record_id]) if r.record_id in record_statuses else r for r in records
    ]
    out_exceptions = [
        replace(e, status=exception_statuses[e.exception_id]) if e.exception_id in exception_statuses else e
        for e in exceptions
    ]
    return out_records, out_exceptions


class LifecycleTracker:
    def __init__(self, statuses: StatusRepository):
        self._statuses = statuses

    @staticmethod
    def _require_reviewer(current_role: Role) -> None:
        if current_role not in REVIEW_ROLES:
            raise AuthorizationError("Only reviewers can change review status")

    def acknowledge(self, exception_id: str, *, current_role: Role, actor_id: Optional[str] = None) -> ExceptionStatus:
        self._require_reviewer(current_role)

        current = self._statuses.get_exception_statuses([exception_id]).get(exception_id, ExceptionStatus.PENDING)
        if not can_acknowledge(current):
            raise LifecycleError(current, ExceptionStatus.ACKNOWLEDGED)

        self._statuses.set_exception_status(
            exception_id=exception_id,
            status=ExceptionStatus.ACKNOWLEDGED,
            updated_by=actor_id,
        )
        logger.info("exception %s acknowledged by %s", exception_id, actor_id)
        return ExceptionStatus.ACKNOWLEDGED

    def move_record(
        self,
        record_id: str,
        target: RecordStatus,
        *,
        current_role: Role,
        actor_id: Optional[str] = None,
    ) -> RecordStatus:
        self._require_reviewer(current_role)

        current = self._statuses.get_record_statuses([record_id]).get(record_id, RecordStatus.PENDING)
        if not can_transition_record(current, target):
            raise LifecycleError(current, target)

        self._statuses.set_record_status(record_id=record_id, status=target, updated_by=actor_id)
        logger.info("record %s moved %s -> %s by %s", record_id, current.value, target.value, actor_id)
        return target

    def annotate(
        self,
        records: Sequence[AttendanceRecord],
        exceptions: Sequence[ExceptionRecord],
    ) -> tuple[list[AttendanceRecord], list[ExceptionRecord]]:
        return apply_annotations(
            records,
            exceptions,
            record_statuses=self._statuses.get_record_statuses([r.record_id for r in records]),
            exception_statuses=self._statuses.get_exception_statuses([e.exception_id for e in exceptions]),
        )
