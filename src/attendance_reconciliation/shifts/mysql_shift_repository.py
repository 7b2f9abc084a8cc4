from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..common.validators import require_non_negative
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import ShiftAssignment, ShiftTemplate, Site
from .repository import ShiftAssignmentRepository, ShiftTemplateRepository, SiteRepository


def _to_template(r: dict) -> ShiftTemplate:
    return ShiftTemplate(
        template_id=str(r["template_id"]),
        name=r["template_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        break_minutes=require_non_negative(r.get("break_minutes") or 0, "break_minutes"),
        grace_period_minutes=require_non_negative(r.get("grace_period_minutes") or 0, "grace_period_minutes"),
    )


class MySQLShiftTemplateRepository(ShiftTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT template_id, template_name, start_time, end_time, break_minutes, grace_period_minutes
                FROM shift_templates
                ORDER BY template_id
                """
            )
            return [_to_template(r) for r in fetchall(cur)]


class MySQLShiftAssignmentRepository(ShiftAssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[ShiftAssignment]:
        sql = """
            SELECT assignment_id, employee_id, work_date, template_id, location_id
            FROM shift_assignments
            WHERE work_date BETWEEN %s AND %s
        """
        params: list = [start, end]
        if employee_id:
            sql += " AND employee_id=%s"
            params.append(employee_id)
        sql += " ORDER BY work_date, employee_id, assignment_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                ShiftAssignment(
                    assignment_id=str(r["assignment_id"]),
                    employee_id=str(r["employee_id"]),
                    work_date=r["work_date"],
                    shift_template_id=str(r["template_id"]),
                    location_id=r.get("location_id"),
                )
                for r in fetchall(cur)
            ]


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT site_id, site_name, latitude, longitude, radius_meters FROM sites ORDER BY site_id")
            return [
                Site(
                    site_id=str(r["site_id"]),
                    name=r["site_name"],
                    latitude=float(r["latitude"]),
                    longitude=float(r["longitude"]),
                    radius_meters=float(r["radius_meters"]),
                )
                for r in fetchall(cur)
            ]
