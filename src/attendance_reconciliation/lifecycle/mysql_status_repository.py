from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import ExceptionStatus, RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import StatusRepository


def _placeholders(n: int) -> str:
    return ",".join(["%s"] * n)


class MySQLStatusRepository(StatusRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_record_statuses(self, record_ids: Sequence[str]) -> dict[str, RecordStatus]:
        if not record_ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT record_id, status FROM record_status WHERE record_id IN ({_placeholders(len(record_ids))})",
                tuple(record_ids),
            )
            return {r["record_id"]: RecordStatus(r["status"]) for r in fetchall(cur)}

    def get_exception_statuses(self, exception_ids: Sequence[str]) -> dict[str, ExceptionStatus]:
        if not exception_ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT exception_id, status FROM exception_status WHERE exception_id IN ({_placeholders(len(exception_ids))})",
                tuple(exception_ids),
            )
            return {r["exception_id"]: ExceptionStatus(r["status"]) for r in fetchall(cur)}

    def set_record_status(self, *, record_id: str, status: RecordStatus, updated_by: Optional[str] = None) -> None:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            cur.execute(
                """
                INSERT INTO record_status(record_id, status, updated_by)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), updated_by=VALUES(updated_by)
                """,
                (record_id, status.value, updated_by),
            )

    def set_exception_status(
        self,
        *,
        exception_id: str,
        status: ExceptionStatus,
        updated_by: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            cur.execute(
                """
                INSERT INTO exception_status(exception_id, status, updated_by)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), updated_by=VALUES(updated_by)
                """,
                (exception_id, status.value, updated_by),
            )
