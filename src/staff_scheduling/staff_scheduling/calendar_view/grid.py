"""Calendar grid generation for month and week views.

Weeks start on Sunday. A month grid is always six full weeks (42 cells)
starting on the Sunday on/before the 1st, so months that span four, five
or six calendar rows render with the same shape. Everything here is pure
date arithmetic: no I/O and no reads of the wall clock except in
``go_to_today``.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, List, Tuple

from ..common.datetime_utils import DateLike, now_local, to_local_date
from ..core.constants import MONTH_GRID_CELLS, WEEK_GRID_CELLS
from ..core.enums import Direction, ViewMode


def start_of_week(day: date) -> date:
    """Sunday on/before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def last_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """Shift by whole calendar months, clamping to the last valid day.

    Jan 31 + 1 month -> Feb 28 (or 29), never a rollover into March.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def consecutive_days(start: date, count: int) -> List[date]:
    return [start + timedelta(days=i) for i in range(count)]


def is_same_month(day: DateLike, anchor: DateLike) -> bool:
    d, a = to_local_date(day), to_local_date(anchor)
    return d.year == a.year and d.month == a.month


@dataclass
class CalendarGridGenerator:
    clock: Callable[[], datetime] = field(default=now_local, repr=False)

    def month_grid(self, anchor: DateLike) -> List[date]:
        first = first_of_month(to_local_date(anchor))
        return consecutive_days(start_of_week(first), MONTH_GRID_CELLS)

    def week_grid(self, anchor: DateLike) -> List[date]:
        return consecutive_days(start_of_week(to_local_date(anchor)), WEEK_GRID_CELLS)

    def grid(self, anchor: DateLike, view_mode: ViewMode) -> List[date]:
        if ViewMode(view_mode) == ViewMode.WEEK:
            return self.week_grid(anchor)
        return self.month_grid(anchor)

    def navigate(self, anchor: DateLike, direction: Direction, view_mode: ViewMode) -> date:
        day = to_local_date(anchor)
        step = 1 if Direction(direction) == Direction.NEXT else -1
        if ViewMode(view_mode) == ViewMode.MONTH:
            return add_months(day, step)
        return day + timedelta(days=7 * step)

    def go_to_today(self) -> date:
        return self.clock().date()

    def period_range(self, anchor: DateLike, view_mode: ViewMode) -> Tuple[date, date]:
        """The period the view is *about*: whole month, or Sunday..Saturday."""
        day = to_local_date(anchor)
        if ViewMode(view_mode) == ViewMode.MONTH:
            return first_of_month(day), last_of_month(day)
        week = self.week_grid(day)
        return week[0], week[-1]

    def display_title(self, anchor: DateLike, view_mode: ViewMode) -> str:
        day = to_local_date(anchor)
        if ViewMode(view_mode) == ViewMode.MONTH:
            return f"{calendar.month_name[day.month]} {day.year}"

        start, end = self.period_range(day, ViewMode.WEEK)
        if start.year != end.year:
            return (
                f"{calendar.month_name[start.month]} {start.day}, {start.year} - "
                f"{calendar.month_name[end.month]} {end.day}, {end.year}"
            )
        if start.month == end.month:
            return f"{calendar.month_name[start.month]} {start.day}-{end.day}, {start.year}"
        return (
            f"{calendar.month_name[start.month]} {start.day} - "
            f"{calendar.month_name[end.month]} {end.day}, {start.year}"
        )
