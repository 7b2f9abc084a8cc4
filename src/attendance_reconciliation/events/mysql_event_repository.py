from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from ..core.enums import TimeEventSource, TimeEventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_timestamp
from .model import GeoPoint, TimeEvent
from .repository import TimeEventRepository


def _utc_naive(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _to_event(r: dict) -> TimeEvent:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return TimeEvent(
        event_id=str(r["event_id"]),
        employee_id=str(r["employee_id"]),
        timestamp=normalize_mysql_timestamp(r["event_ts"]),
        event_type=TimeEventType(r["event_type"]),
        source=TimeEventSource(r["source"]),
        location=location,
    )


class MySQLTimeEventRepository(TimeEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[str] = None,
    ) -> Sequence[TimeEvent]:
        sql = """
            SELECT event_id, employee_id, event_ts, event_type, source, latitude, longitude
            FROM time_events
            WHERE event_ts >= %s AND event_ts < %s
        """
        params: list = [_utc_naive(start), _utc_naive(end)]
        if employee_id:
            sql += " AND employee_id=%s"
            params.append(employee_id)
        sql += " ORDER BY employee_id, event_ts, event_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_event(r) for r in fetchall(cur)]

    def last_punches_before(
        self,
        *,
        before: datetime,
        employee_id: Optional[str] = None,
    ) -> Sequence[TimeEvent]:
        sql = """
            SELECT e.event_id, e.employee_id, e.event_ts, e.event_type, e.source, e.latitude, e.longitude
            FROM time_events e
            JOIN (
                SELECT employee_id, MAX(event_ts) AS last_ts
                FROM time_events
                WHERE event_ts < %s AND event_type IN ('CLOCK_IN', 'CLOCK_OUT')
        """
        params: list = [_utc_naive(before)]
        if employee_id:
            sql += " AND employee_id=%s"
            params.append(employee_id)
        sql += """
                GROUP BY employee_id
            ) m ON m.employee_id = e.employee_id AND m.last_ts = e.event_ts
            WHERE e.event_type IN ('CLOCK_IN', 'CLOCK_OUT')
            ORDER BY e.employee_id, e.event_id
        """

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_event(r) for r in fetchall(cur)]
