from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Sequence

from ..absences.model import AbsenceRequest
from ..absences.patch import AbsencePatch
from ..absences.store import AbsenceStore
from ..calendar_view.grid import CalendarGridGenerator, is_same_month
from ..common.datetime_utils import DateLike, format_local_date, now_local, to_local_date
from ..common.validators import ordered_date_range, require_date_range
from ..core.enums import AbsenceStatus, AbsenceType, Direction, EventType, ViewMode
from ..core.exceptions import NotFound
from ..schedules.model import ShiftSchedule
from ..schedules.store import ScheduleStore
from .notifications import LoggingNotificationSink, NotificationEvent, NotificationSink
from .range_selection import DateRange, RangeSelection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarView:
    anchor: date
    view_mode: ViewMode
    title: str
    dates: List[date]
    schedule_by_date: Dict[date, Optional[ShiftSchedule]]
    absences_by_date: Dict[date, List[AbsenceRequest]]

    def to_dict(self) -> dict:
        cells = []
        for day in self.dates:
            schedule = self.schedule_by_date.get(day)
            # Week cells all belong to the period even across a month boundary.
            in_month = self.view_mode == ViewMode.WEEK or is_same_month(day, self.anchor)
            cells.append(
                {
                    "date": format_local_date(day),
                    "in_month": in_month,
                    "schedule": schedule.to_dict() if schedule else None,
                    "absences": [a.to_dict() for a in self.absences_by_date.get(day, [])],
                }
            )
        return {
            "anchor": format_local_date(self.anchor),
            "view": self.view_mode.value,
            "title": self.title,
            "cells": cells,
        }


@dataclass(frozen=True)
class AbsenceConflicts:
    absences: List[AbsenceRequest]
    shifts: List[ShiftSchedule]

    @property
    def has_conflicts(self) -> bool:
        return bool(self.absences or self.shifts)

    def to_dict(self) -> dict:
        return {
            "has_conflicts": self.has_conflicts,
            "absences": [a.to_dict() for a in self.absences],
            "shifts": [s.to_dict() for s in self.shifts],
        }


@dataclass(frozen=True)
class AbsenceSubmission:
    request: AbsenceRequest
    conflicts: AbsenceConflicts


class SchedulingEngine:
    """Calendar views plus every state-changing operation staff can trigger.

    Mutations go through the stores so the state machines stay in one place;
    the engine adds ownership checks, conflict previews and notifications.
    """

    def __init__(
        self,
        schedules: ScheduleStore,
        absences: AbsenceStore,
        grid: Optional[CalendarGridGenerator] = None,
        *,
        notifier: Optional[NotificationSink] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._schedules = schedules
        self._absences = absences
        self._grid = grid or CalendarGridGenerator(clock=clock)
        self._notifier = notifier or LoggingNotificationSink()
        self._clock = clock

    # -------- Calendar --------
    def get_calendar_view(
        self,
        *,
        staff_id: str,
        hotel_id: str,
        anchor: DateLike,
        view_mode: ViewMode = ViewMode.MONTH,
    ) -> CalendarView:
        view_mode = ViewMode(view_mode)
        anchor_d = to_local_date(anchor)
        dates = self._grid.grid(anchor_d, view_mode)
        first, last = dates[0], dates[-1]

        # One range query per store for the whole grid, bucketed in memory.
        shifts = self._schedules.lookup_by_range(staff_id=staff_id, hotel_id=hotel_id, start=first, end=last)
        absences = self._absences.overlaps_range(staff_id, first, last, hotel_id=hotel_id)
        shifts_by_day = ScheduleStore.group_by_date(shifts)

        schedule_by_date: Dict[date, Optional[ShiftSchedule]] = {}
        absences_by_date: Dict[date, List[AbsenceRequest]] = {}
        for day in dates:
            day_shifts = shifts_by_day.get(format_local_date(day), [])
            schedule_by_date[day] = day_shifts[0] if day_shifts else None
            absences_by_date[day] = [a for a in absences if a.covers(day)]

        return CalendarView(
            anchor=anchor_d,
            view_mode=view_mode,
            title=self._grid.display_title(anchor_d, view_mode),
            dates=dates,
            schedule_by_date=schedule_by_date,
            absences_by_date=absences_by_date,
        )

    def navigate(self, anchor: DateLike, direction: Direction, view_mode: ViewMode) -> date:
        return self._grid.navigate(anchor, direction, view_mode)

    def go_to_today(self) -> date:
        return self._grid.go_to_today()

    # -------- Absence range selection and conflicts --------
    def select_absence_range(self, staff_id: str, first_click: DateLike, second_click: DateLike) -> DateRange:
        selection = RangeSelection()
        selection.press(first_click)
        selected = selection.press(second_click)
        logger.debug("staff %s selected %s", staff_id, selected)
        return selected

    def find_conflicts(self, *, staff_id: str, hotel_id: str, start: DateLike, end: DateLike) -> AbsenceConflicts:
        start_d, end_d = ordered_date_range(start, end)
        return AbsenceConflicts(
            absences=self._absences.overlaps_range(staff_id, start_d, end_d, hotel_id=hotel_id),
            shifts=self._schedules.lookup_by_range(staff_id=staff_id, hotel_id=hotel_id, start=start_d, end=end_d),
        )

    # -------- Absence requests --------
    def list_absences(
        self,
        *,
        staff_id: str,
        hotel_id: str,
        status: Optional[AbsenceStatus] = None,
    ) -> List[AbsenceRequest]:
        return self._absences.list_requests(staff_id, hotel_id=hotel_id, status=status)

    def submit_absence(
        self,
        *,
        staff_id: str,
        hotel_id: str,
        request_type: AbsenceType | str,
        start_date: DateLike,
        end_date: DateLike,
        notes: Optional[str] = None,
    ) -> AbsenceSubmission:
        """Submit a request; conflicts are reported alongside, never blocking."""
        start_d, end_d = require_date_range(start_date, end_date)
        conflicts = self.find_conflicts(staff_id=staff_id, hotel_id=hotel_id, start=start_d, end=end_d)

        req = self._absences.submit(
            staff_id=staff_id,
            hotel_id=hotel_id,
            request_type=request_type,
            start_date=start_d,
            end_date=end_d,
            notes=notes,
        )
        self._emit(
            EventType.ABSENCE_SUBMITTED,
            staff_id=req.staff_id,
            dates=(format_local_date(req.start_date), format_local_date(req.end_date)),
            subject_id=req.request_id,
        )
        return AbsenceSubmission(request=req, conflicts=conflicts)

    def update_absence(self, *, staff_id: str, hotel_id: str, request_id: str, patch: AbsencePatch) -> AbsenceRequest:
        self._own_absence(staff_id=staff_id, hotel_id=hotel_id, request_id=request_id)
        return self._absences.update(request_id, patch)

    def cancel_absence(self, *, staff_id: str, hotel_id: str, request_id: str) -> AbsenceRequest:
        self._own_absence(staff_id=staff_id, hotel_id=hotel_id, request_id=request_id)
        return self._absences.cancel(request_id)

    def delete_absence(self, *, staff_id: str, hotel_id: str, request_id: str) -> bool:
        """Idempotent: deleting a request that is already gone returns False."""
        try:
            self._own_absence(staff_id=staff_id, hotel_id=hotel_id, request_id=request_id)
        except NotFound:
            return False
        return self._absences.delete(request_id)

    # -------- Shifts --------
    def list_schedules(self, *, staff_id: str, hotel_id: str, start: DateLike, end: DateLike) -> List[ShiftSchedule]:
        return self._schedules.lookup_by_range(staff_id=staff_id, hotel_id=hotel_id, start=start, end=end)

    def today_schedule(self, *, staff_id: str, hotel_id: str) -> Optional[ShiftSchedule]:
        return self._schedules.today_schedule(staff_id=staff_id, hotel_id=hotel_id, now=self._clock())

    def clock_in(self, *, staff_id: str, hotel_id: str, schedule_id: str, actor_id: Optional[str] = None) -> ShiftSchedule:
        self._own_schedule(staff_id=staff_id, hotel_id=hotel_id, schedule_id=schedule_id)
        schedule = self._schedules.clock_in(schedule_id, actor_id or staff_id, now=self._clock())
        self._emit_shift(EventType.SHIFT_CLOCKED_IN, schedule)
        return schedule

    def clock_out(self, *, staff_id: str, hotel_id: str, schedule_id: str, actor_id: Optional[str] = None) -> ShiftSchedule:
        self._own_schedule(staff_id=staff_id, hotel_id=hotel_id, schedule_id=schedule_id)
        schedule = self._schedules.clock_out(schedule_id, actor_id or staff_id, now=self._clock())
        self._emit_shift(EventType.SHIFT_CLOCKED_OUT, schedule)
        return schedule

    def confirm_shift(self, *, staff_id: str, hotel_id: str, schedule_id: str, actor_id: Optional[str] = None) -> ShiftSchedule:
        self._own_schedule(staff_id=staff_id, hotel_id=hotel_id, schedule_id=schedule_id)
        schedule = self._schedules.confirm_shift(schedule_id, actor_id or staff_id, now=self._clock())
        self._emit_shift(EventType.SHIFT_CONFIRMED, schedule)
        return schedule

    # -------- helpers --------
    def _own_schedule(self, *, staff_id: str, hotel_id: str, schedule_id: str) -> ShiftSchedule:
        schedule = self._schedules.get(schedule_id)
        if schedule.staff_id != str(staff_id) or schedule.hotel_id != str(hotel_id):
            raise NotFound("Shift not found")
        return schedule

    def _own_absence(self, *, staff_id: str, hotel_id: str, request_id: str) -> AbsenceRequest:
        req = self._absences.get(request_id)
        if req.staff_id != str(staff_id) or req.hotel_id != str(hotel_id):
            raise NotFound("Absence request not found")
        return req

    def _emit_shift(self, event_type: EventType, schedule: ShiftSchedule) -> None:
        self._emit(event_type, staff_id=schedule.staff_id, dates=(schedule.schedule_day,), subject_id=schedule.schedule_id)

    def _emit(self, event_type: EventType, *, staff_id: str, dates: Sequence[str], subject_id: str) -> None:
        event = NotificationEvent(
            event_type=event_type,
            staff_id=str(staff_id),
            dates=tuple(dates),
            subject_id=str(subject_id),
            occurred_at=self._clock(),
        )
        try:
            self._notifier.notify(event)
        except Exception:
            logger.warning("notification %s for %s failed", event_type.value, subject_id, exc_info=True)
