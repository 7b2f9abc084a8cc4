from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_names(self, employee_ids: Sequence[str]) -> dict[str, str]:
        ids = sorted(set(employee_ids))
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT employee_id, full_name FROM employees WHERE employee_id IN ({','.join(['%s'] * len(ids))})",
                tuple(ids),
            )
            return {str(r["employee_id"]): r["full_name"] for r in fetchall(cur)}
