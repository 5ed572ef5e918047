from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional

from ..common.datetime_utils import DateLike, format_local_date, now_local, to_local_date
from ..common.validators import ordered_date_range
from ..core.enums import ShiftStatus, ShiftType
from ..core.exceptions import (
    AlreadyConfirmed,
    AlreadyEnded,
    AlreadyStarted,
    InvalidTransition,
    NotFound,
    NotStarted,
    NotToday,
)
from .model import ShiftSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def _check_clock_in(schedule: ShiftSchedule, today: date) -> None:
    if schedule.is_started:
        raise AlreadyStarted()
    if schedule.status != ShiftStatus.SCHEDULED:
        raise InvalidTransition(f"Cannot clock in to a {schedule.status.value.lower()} shift")
    if schedule.schedule_day != format_local_date(today):
        raise NotToday("You can only clock in on the day of your shift")


def _check_clock_out(schedule: ShiftSchedule, today: date) -> None:
    if not schedule.is_started:
        raise NotStarted()
    if schedule.is_ended:
        raise AlreadyEnded()
    if schedule.status != ShiftStatus.CONFIRMED:
        raise InvalidTransition(f"Cannot clock out of a {schedule.status.value.lower()} shift")
    if schedule.schedule_day != format_local_date(today):
        raise NotToday("You can only clock out on the day of your shift")


def _check_confirm(schedule: ShiftSchedule) -> None:
    if schedule.is_confirmed:
        raise AlreadyConfirmed()
    if schedule.status != ShiftStatus.SCHEDULED:
        raise InvalidTransition(f"Cannot confirm a {schedule.status.value.lower()} shift")


class ScheduleStore:
    """Shift lookups and the shift state machine.

    Every transition validates against the current record, then applies a
    compare-and-swap update. A caller that loses a race re-reads the record
    and gets the precondition error the winner's write now triggers.
    """

    def __init__(self, schedules: ScheduleRepository, *, clock: Callable[[], datetime] = now_local):
        self._schedules = schedules
        self._clock = clock

    def get(self, schedule_id: str) -> ShiftSchedule:
        schedule = self._schedules.get_by_id(schedule_id=str(schedule_id))
        if not schedule:
            raise NotFound("Shift not found")
        return schedule

    def clock_in(self, schedule_id: str, actor_id: str, *, now: Optional[datetime] = None) -> ShiftSchedule:
        now = now or self._clock()
        schedule = self.get(schedule_id)
        _check_clock_in(schedule, now.date())

        if not self._schedules.mark_clocked_in(schedule_id=schedule.schedule_id, actor_id=str(actor_id), at=now):
            _check_clock_in(self.get(schedule_id), now.date())
            raise InvalidTransition()

        logger.info("shift %s clocked in by %s", schedule.schedule_id, actor_id)
        return replace(
            schedule,
            status=ShiftStatus.CONFIRMED,
            actual_start_time=now,
            is_confirmed=True,
            confirmed_at=now,
            confirmed_by=str(actor_id),
            updated_at=now,
        )

    def clock_out(self, schedule_id: str, actor_id: str, *, now: Optional[datetime] = None) -> ShiftSchedule:
        now = now or self._clock()
        schedule = self.get(schedule_id)
        _check_clock_out(schedule, now.date())

        # Never record an end before the recorded start.
        ended_at = max(now, schedule.actual_start_time)
        if not self._schedules.mark_clocked_out(schedule_id=schedule.schedule_id, at=ended_at):
            _check_clock_out(self.get(schedule_id), now.date())
            raise InvalidTransition()

        logger.info("shift %s clocked out by %s", schedule.schedule_id, actor_id)
        return replace(schedule, status=ShiftStatus.COMPLETED, actual_end_time=ended_at, updated_at=now)

    def confirm_shift(self, schedule_id: str, actor_id: str, *, now: Optional[datetime] = None) -> ShiftSchedule:
        now = now or self._clock()
        schedule = self.get(schedule_id)
        _check_confirm(schedule)

        if not self._schedules.mark_confirmed(schedule_id=schedule.schedule_id, actor_id=str(actor_id), at=now):
            _check_confirm(self.get(schedule_id))
            raise InvalidTransition()

        logger.info("shift %s confirmed by %s", schedule.schedule_id, actor_id)
        return replace(
            schedule,
            status=ShiftStatus.CONFIRMED,
            is_confirmed=True,
            confirmed_at=now,
            confirmed_by=str(actor_id),
            updated_at=now,
        )

    def lookup_by_range(
        self,
        *,
        staff_id: str,
        hotel_id: str,
        start: DateLike,
        end: DateLike,
        status: Optional[ShiftStatus] = None,
        shift_type: Optional[ShiftType] = None,
    ) -> List[ShiftSchedule]:
        start_d, end_d = ordered_date_range(start, end)
        lo, hi = format_local_date(start_d), format_local_date(end_d)
        rows = self._schedules.list_range(
            staff_id=str(staff_id),
            hotel_id=str(hotel_id),
            start=start_d,
            end=end_d,
            status=status,
            shift_type=shift_type,
        )
        # Compare on calendar-date strings; storage may hand back datetimes.
        return [s for s in rows if lo <= s.schedule_day <= hi]

    def lookup_by_date(self, *, staff_id: str, hotel_id: str, day: DateLike) -> Optional[ShiftSchedule]:
        matches = self.lookup_by_range(staff_id=staff_id, hotel_id=hotel_id, start=day, end=day)
        if len(matches) > 1:
            logger.warning("staff %s has %d shifts on %s, using the earliest", staff_id, len(matches), format_local_date(day))
        return matches[0] if matches else None

    def today_schedule(self, *, staff_id: str, hotel_id: str, now: Optional[datetime] = None) -> Optional[ShiftSchedule]:
        today = to_local_date(now or self._clock())
        return self.lookup_by_date(staff_id=staff_id, hotel_id=hotel_id, day=today)

    @staticmethod
    def group_by_date(schedules: Iterable[ShiftSchedule]) -> Dict[str, List[ShiftSchedule]]:
        groups: Dict[str, List[ShiftSchedule]] = defaultdict(list)
        for schedule in schedules:
            groups[schedule.schedule_day].append(schedule)
        return dict(groups)
