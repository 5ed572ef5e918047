from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .absences.mysql_absence_repository import MySQLAbsenceRepository
from .absences.repository import AbsenceRepository
from .absences.store import AbsenceStore
from .calendar_view.grid import CalendarGridGenerator
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_NOTIFY_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .engine.notifications import NotificationSink, build_notification_sink
from .engine.service import SchedulingEngine
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.store import ScheduleStore


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    schedules_repo: ScheduleRepository
    absences_repo: AbsenceRepository

    schedule_store: ScheduleStore
    absence_store: AbsenceStore
    grid: CalendarGridGenerator
    notifier: NotificationSink
    engine: SchedulingEngine


def assemble(
    *,
    schedules_repo: ScheduleRepository,
    absences_repo: AbsenceRepository,
    notifier: NotificationSink,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    schedule_store = ScheduleStore(schedules_repo, clock=clock)
    absence_store = AbsenceStore(absences_repo, clock=clock)
    grid = CalendarGridGenerator(clock=clock)
    engine = SchedulingEngine(schedule_store, absence_store, grid, notifier=notifier, clock=clock)

    return Container(
        conn=conn,
        schedules_repo=schedules_repo,
        absences_repo=absences_repo,
        schedule_store=schedule_store,
        absence_store=absence_store,
        grid=grid,
        notifier=notifier,
        engine=engine,
    )


def build_container(
    *,
    db_config: dict,
    notify_webhook_url: Optional[str] = None,
    notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT_SECONDS,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        schedules_repo=MySQLScheduleRepository(conn),
        absences_repo=MySQLAbsenceRepository(conn),
        notifier=build_notification_sink(notify_webhook_url, timeout=notify_timeout),
        clock=clock,
        conn=conn,
    )
