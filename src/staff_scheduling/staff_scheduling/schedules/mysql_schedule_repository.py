from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import ShiftStatus, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_duration, normalize_mysql_time
from .model import ShiftSchedule
from .repository import ScheduleRepository

_COLUMNS = """
    id, staff_id, hotel_id, schedule_date, shift_type, shift_start, shift_end,
    status, is_confirmed, confirmed_at, confirmed_by,
    actual_start_time, actual_end_time, break_minutes, notes,
    created_at, updated_at
"""


def _to_schedule(r: dict) -> ShiftSchedule:
    return ShiftSchedule(
        schedule_id=str(r["id"]),
        staff_id=str(r["staff_id"]),
        hotel_id=str(r["hotel_id"]),
        schedule_date=r["schedule_date"],
        shift_type=ShiftType(r["shift_type"]),
        shift_start=normalize_mysql_time(r["shift_start"]),
        shift_end=normalize_mysql_time(r["shift_end"]),
        status=ShiftStatus(r["status"]),
        is_confirmed=bool(r.get("is_confirmed")),
        confirmed_at=r.get("confirmed_at"),
        confirmed_by=r.get("confirmed_by"),
        actual_start_time=r.get("actual_start_time"),
        actual_end_time=r.get("actual_end_time"),
        break_duration=normalize_mysql_duration(r.get("break_minutes")),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, *, schedule_id: str) -> Optional[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff_schedules WHERE id=%s", (str(schedule_id),))
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def create(self, *, schedule: ShiftSchedule) -> str:
        schedule_id = schedule.schedule_id or str(uuid.uuid4())
        break_minutes = int(schedule.break_duration.total_seconds() // 60) if schedule.break_duration else None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_schedules(
                    id, staff_id, hotel_id, schedule_date, shift_type, shift_start, shift_end,
                    status, is_confirmed, break_minutes, notes, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,NOW(),NOW())
                """,
                (
                    schedule_id,
                    schedule.staff_id,
                    schedule.hotel_id,
                    schedule.schedule_date,
                    schedule.shift_type.value,
                    schedule.shift_start,
                    schedule.shift_end,
                    schedule.status.value,
                    int(schedule.is_confirmed),
                    break_minutes,
                    schedule.notes,
                ),
            )
        return schedule_id

    def list_range(
        self,
        *,
        staff_id: str,
        hotel_id: str,
        start: date,
        end: date,
        status: Optional[ShiftStatus] = None,
        shift_type: Optional[ShiftType] = None,
    ) -> Sequence[ShiftSchedule]:
        clauses = ["staff_id=%s", "hotel_id=%s", "schedule_date BETWEEN %s AND %s"]
        params: list[object] = [str(staff_id), str(hotel_id), start, end]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if shift_type is not None:
            clauses.append("shift_type=%s")
            params.append(shift_type.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM staff_schedules
                WHERE {where}
                ORDER BY schedule_date ASC, shift_start ASC
                """,
                tuple(params),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def mark_clocked_in(self, *, schedule_id: str, actor_id: str, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_schedules
                SET status=%s, actual_start_time=%s,
                    is_confirmed=1, confirmed_at=%s, confirmed_by=%s, updated_at=%s
                WHERE id=%s AND status=%s AND actual_start_time IS NULL
                """,
                (
                    ShiftStatus.CONFIRMED.value,
                    at,
                    at,
                    str(actor_id),
                    at,
                    str(schedule_id),
                    ShiftStatus.SCHEDULED.value,
                ),
            )
            return cur.rowcount > 0

    def mark_clocked_out(self, *, schedule_id: str, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_schedules
                SET status=%s, actual_end_time=%s, updated_at=%s
                WHERE id=%s AND status=%s
                  AND actual_start_time IS NOT NULL AND actual_end_time IS NULL
                """,
                (
                    ShiftStatus.COMPLETED.value,
                    at,
                    at,
                    str(schedule_id),
                    ShiftStatus.CONFIRMED.value,
                ),
            )
            return cur.rowcount > 0

    def mark_confirmed(self, *, schedule_id: str, actor_id: str, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_schedules
                SET status=%s, is_confirmed=1, confirmed_at=%s, confirmed_by=%s, updated_at=%s
                WHERE id=%s AND status=%s AND is_confirmed=0
                """,
                (
                    ShiftStatus.CONFIRMED.value,
                    at,
                    str(actor_id),
                    at,
                    str(schedule_id),
                    ShiftStatus.SCHEDULED.value,
                ),
            )
            return cur.rowcount > 0
