from __future__ import annotations

from dataclasses import dataclass

from .common.datetime_utils import Clock, get_timezone
from .core.constants import DEFAULT_MAX_WORKERS, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .directory.mysql_employee_directory import MySQLEmployeeDirectory
from .engine import ReconciliationEngine
from .events.mysql_event_repository import MySQLTimeEventRepository
from .lifecycle.mysql_status_repository import MySQLStatusRepository
from .lifecycle.tracker import LifecycleTracker
from .reconciliation.service import ReconciliationService
from .shifts.mysql_shift_repository import (
    MySQLShiftAssignmentRepository,
    MySQLShiftTemplateRepository,
    MySQLSiteRepository,
)


@dataclass(frozen=True)
class Container:
    engine: ReconciliationEngine
    lifecycle_tracker: LifecycleTracker
    reconciliation_service: ReconciliationService


def build_container(
    *,
    db_config: dict,
    timezone_name: str = DEFAULT_TIMEZONE,
    max_workers: int = DEFAULT_MAX_WORKERS,
    clock: Clock | None = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    tz = get_timezone(timezone_name)

    engine = ReconciliationEngine(tz=tz, clock=clock, max_workers=max_workers)
    tracker = LifecycleTracker(MySQLStatusRepository(conn))
    service = ReconciliationService(
        engine,
        MySQLShiftTemplateRepository(conn),
        MySQLShiftAssignmentRepository(conn),
        MySQLTimeEventRepository(conn),
        tracker,
        tz=tz,
        sites=MySQLSiteRepository(conn),
        directory=MySQLEmployeeDirectory(conn),
    )

    return Container(engine=engine, lifecycle_tracker=tracker, reconciliation_service=service)
