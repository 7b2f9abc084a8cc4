from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import parse_time_of_day
from ..core.logging import get_logger
from .connection import DatabaseConnection

logger = get_logger("database")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, write: bool = False):
    """Yield ``(conn, cursor)`` on a pooled connection.

    Read adapters leave ``write`` off and never commit. Writers commit on a
    clean exit and roll back if the block raises.
    """
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        if write:
            conn.commit()
    except Exception:
        if write:
            logger.warning("rolling back after failed write", exc_info=True)
            conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)

    if isinstance(value, str):
        # Templates are minute precision; seconds are dropped.
        return parse_time_of_day(":".join(value.strip().split(":")[:2]))

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def normalize_mysql_timestamp(value: Any) -> Optional[datetime]:
    """DATETIME columns are stored in UTC and come back naive."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
