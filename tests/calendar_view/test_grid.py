from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from staff_scheduling.calendar_view.grid import CalendarGridGenerator, add_months, start_of_week
from staff_scheduling.core.enums import Direction, ViewMode


@pytest.fixture
def grid():
    return CalendarGridGenerator(clock=lambda: datetime(2024, 3, 15, 9, 0))


@pytest.mark.parametrize("anchor", [date(2024, 2, 10), date(2024, 3, 31), date(2026, 2, 1), date(2025, 6, 30)])
def test_month_grid_is_42_consecutive_days_from_sunday(grid, anchor):
    cells = grid.month_grid(anchor)

    assert len(cells) == 42
    # date.weekday(): Monday=0 ... Sunday=6
    assert cells[0].weekday() == 6
    assert cells[0] <= anchor.replace(day=1)
    assert cells[0] > anchor.replace(day=1) - timedelta(days=7)
    assert all(b - a == timedelta(days=1) for a, b in zip(cells, cells[1:]))


def test_month_grid_for_march_2024(grid):
    cells = grid.month_grid(date(2024, 3, 15))

    # March 1st 2024 is a Friday.
    assert cells[0] == date(2024, 2, 25)
    assert cells[-1] == date(2024, 4, 6)


def test_week_grid_starts_on_sunday(grid):
    cells = grid.week_grid(date(2024, 3, 6))

    assert cells == [date(2024, 3, 3) + timedelta(days=i) for i in range(7)]


def test_start_of_week_on_sunday_is_identity():
    assert start_of_week(date(2024, 3, 3)) == date(2024, 3, 3)


def test_navigate_month_clamps_to_last_day(grid):
    assert grid.navigate(date(2024, 1, 31), Direction.NEXT, ViewMode.MONTH) == date(2024, 2, 29)
    assert grid.navigate(date(2024, 3, 31), Direction.PREVIOUS, ViewMode.MONTH) == date(2024, 2, 29)
    assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)


def test_navigate_week_moves_seven_days(grid):
    assert grid.navigate(date(2024, 3, 6), Direction.NEXT, ViewMode.WEEK) == date(2024, 3, 13)
    assert grid.navigate(date(2024, 3, 6), Direction.PREVIOUS, ViewMode.WEEK) == date(2024, 2, 28)


def test_go_to_today_uses_clock(grid):
    assert grid.go_to_today() == date(2024, 3, 15)


def test_display_titles(grid):
    assert grid.display_title(date(2024, 3, 15), ViewMode.MONTH) == "March 2024"
    assert grid.display_title(date(2024, 3, 6), ViewMode.WEEK) == "March 3-9, 2024"
    assert grid.display_title(date(2024, 4, 2), ViewMode.WEEK) == "March 31 - April 6, 2024"
    assert grid.display_title(date(2024, 12, 31), ViewMode.WEEK) == "December 29, 2024 - January 4, 2025"


def test_period_range_month(grid):
    assert grid.period_range(date(2024, 2, 10), ViewMode.MONTH) == (date(2024, 2, 1), date(2024, 2, 29))
