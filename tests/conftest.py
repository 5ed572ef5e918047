from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from staff_scheduling.absences.model import AbsenceRequest
from staff_scheduling.container import assemble
from staff_scheduling.core.enums import AbsenceStatus, ShiftStatus, ShiftType
from staff_scheduling.schedules.model import ShiftSchedule

FIXED_NOW = datetime(2024, 3, 15, 8, 30, 0)


class InMemorySchedules:
    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[str, ShiftSchedule] = {}
        self.range_calls = 0

    def get_by_id(self, *, schedule_id: str) -> Optional[ShiftSchedule]:
        return self._rows.get(schedule_id)

    def create(self, *, schedule: ShiftSchedule) -> str:
        sid = schedule.schedule_id or str(uuid.uuid4())
        self._rows[sid] = replace(schedule, schedule_id=sid)
        return sid

    def list_range(self, *, staff_id, hotel_id, start, end, status=None, shift_type=None):
        self.range_calls += 1
        rows = [
            s
            for s in self._rows.values()
            if s.staff_id == staff_id and s.hotel_id == hotel_id and start <= s.schedule_date <= end
        ]
        if status is not None:
            rows = [s for s in rows if s.status == status]
        if shift_type is not None:
            rows = [s for s in rows if s.shift_type == shift_type]
        return sorted(rows, key=lambda s: (s.schedule_date, s.shift_start))

    def mark_clocked_in(self, *, schedule_id, actor_id, at) -> bool:
        with self._lock:
            s = self._rows.get(schedule_id)
            if not s or s.status != ShiftStatus.SCHEDULED or s.is_started:
                return False
            self._rows[schedule_id] = replace(
                s,
                status=ShiftStatus.CONFIRMED,
                actual_start_time=at,
                is_confirmed=True,
                confirmed_at=at,
                confirmed_by=actor_id,
                updated_at=at,
            )
            return True

    def mark_clocked_out(self, *, schedule_id, at) -> bool:
        with self._lock:
            s = self._rows.get(schedule_id)
            if not s or s.status != ShiftStatus.CONFIRMED or not s.is_started or s.is_ended:
                return False
            self._rows[schedule_id] = replace(s, status=ShiftStatus.COMPLETED, actual_end_time=at, updated_at=at)
            return True

    def mark_confirmed(self, *, schedule_id, actor_id, at) -> bool:
        with self._lock:
            s = self._rows.get(schedule_id)
            if not s or s.status != ShiftStatus.SCHEDULED or s.is_confirmed:
                return False
            self._rows[schedule_id] = replace(
                s,
                status=ShiftStatus.CONFIRMED,
                is_confirmed=True,
                confirmed_at=at,
                confirmed_by=actor_id,
                updated_at=at,
            )
            return True


class InMemoryAbsences:
    def __init__(self):
        self._lock = threading.Lock()
        self._rows: dict[str, AbsenceRequest] = {}
        self.overlap_calls = 0

    def create(self, *, request: AbsenceRequest) -> str:
        self._rows[request.request_id] = request
        return request.request_id

    def get_by_id(self, *, request_id: str) -> Optional[AbsenceRequest]:
        return self._rows.get(request_id)

    def list_for_staff(self, *, staff_id, hotel_id=None, status=None, limit=200):
        rows = [r for r in self._rows.values() if r.staff_id == staff_id]
        if hotel_id is not None:
            rows = [r for r in rows if r.hotel_id == hotel_id]
        if status is not None:
            rows = [r for r in rows if r.status == status]
        return list(reversed(rows))[:limit]

    def list_overlapping(self, *, staff_id, start, end, hotel_id=None):
        self.overlap_calls += 1
        return [
            r
            for r in self._rows.values()
            if r.staff_id == staff_id
            and (hotel_id is None or r.hotel_id == hotel_id)
            and r.start_date <= end
            and r.end_date >= start
        ]

    def update_notes(self, *, request_id, notes, at) -> bool:
        with self._lock:
            r = self._rows.get(request_id)
            if not r or r.status != AbsenceStatus.PENDING:
                return False
            self._rows[request_id] = replace(r, notes=notes, updated_at=at)
            return True

    def update_status(self, *, request_id, status, at) -> bool:
        with self._lock:
            r = self._rows.get(request_id)
            if not r or r.status != AbsenceStatus.PENDING:
                return False
            self._rows[request_id] = replace(r, status=status, updated_at=at)
            return True

    def delete(self, *, request_id) -> bool:
        with self._lock:
            return self._rows.pop(request_id, None) is not None


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def notify(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def schedules_repo():
    return InMemorySchedules()


@pytest.fixture
def absences_repo():
    return InMemoryAbsences()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def container(schedules_repo, absences_repo, notifier, clock):
    return assemble(schedules_repo=schedules_repo, absences_repo=absences_repo, notifier=notifier, clock=clock)


@pytest.fixture
def make_shift(schedules_repo):
    def _make(
        *,
        staff_id: str = "s-1",
        hotel_id: str = "h-1",
        day: date = FIXED_NOW.date(),
        shift_type: ShiftType = ShiftType.MORNING,
        start: time = time(7, 0),
        end: time = time(15, 0),
        status: ShiftStatus = ShiftStatus.SCHEDULED,
    ) -> str:
        return schedules_repo.create(
            schedule=ShiftSchedule(
                schedule_id="",
                staff_id=staff_id,
                hotel_id=hotel_id,
                schedule_date=day,
                shift_type=shift_type,
                shift_start=start,
                shift_end=end,
                status=status,
            )
        )

    return _make
