from __future__ import annotations

import threading
from datetime import date, datetime, time, timedelta

import pytest

from staff_scheduling.core.enums import ShiftStatus, ShiftType
from staff_scheduling.core.exceptions import (
    AlreadyConfirmed,
    AlreadyEnded,
    AlreadyStarted,
    InvalidTransition,
    NotFound,
    NotStarted,
    NotToday,
    ValidationError,
)
from staff_scheduling.schedules.model import ShiftSchedule


def test_clock_in_and_out_on_shift_day(container, make_shift):
    store = container.schedule_store
    sid = make_shift()

    started = store.clock_in(sid, "s-1", now=datetime(2024, 3, 15, 7, 2))
    assert started.status == ShiftStatus.CONFIRMED
    assert started.actual_start_time == datetime(2024, 3, 15, 7, 2)
    assert started.is_confirmed and started.confirmed_by == "s-1"

    ended = store.clock_out(sid, "s-1", now=datetime(2024, 3, 15, 15, 5))
    assert ended.status == ShiftStatus.COMPLETED
    assert ended.actual_end_time == datetime(2024, 3, 15, 15, 5)
    assert store.get(sid).status == ShiftStatus.COMPLETED


def test_clock_in_twice_raises_already_started(container, make_shift):
    store = container.schedule_store
    sid = make_shift()
    store.clock_in(sid, "s-1")

    with pytest.raises(AlreadyStarted):
        store.clock_in(sid, "s-1")


def test_clock_out_before_clock_in_raises_not_started(container, make_shift):
    sid = make_shift()

    with pytest.raises(NotStarted):
        container.schedule_store.clock_out(sid, "s-1")


def test_clock_out_twice_raises_already_ended(container, make_shift):
    store = container.schedule_store
    sid = make_shift()
    store.clock_in(sid, "s-1")
    store.clock_out(sid, "s-1")

    with pytest.raises(AlreadyEnded):
        store.clock_out(sid, "s-1")


def test_clock_in_on_another_day_raises_not_today(container, make_shift):
    sid = make_shift(day=date(2024, 3, 16))

    with pytest.raises(NotToday):
        container.schedule_store.clock_in(sid, "s-1")
    assert container.schedule_store.get(sid).status == ShiftStatus.SCHEDULED


def test_clock_in_cancelled_shift_raises_invalid_transition(container, make_shift):
    sid = make_shift(status=ShiftStatus.CANCELLED)

    with pytest.raises(InvalidTransition):
        container.schedule_store.clock_in(sid, "s-1")


def test_clock_out_never_ends_before_start(container, make_shift):
    store = container.schedule_store
    sid = make_shift()
    store.clock_in(sid, "s-1", now=datetime(2024, 3, 15, 9, 0))

    ended = store.clock_out(sid, "s-1", now=datetime(2024, 3, 15, 8, 59))
    assert ended.actual_end_time == datetime(2024, 3, 15, 9, 0)


def test_confirm_shift_then_again(container, make_shift):
    store = container.schedule_store
    sid = make_shift(day=date(2024, 3, 20))

    confirmed = store.confirm_shift(sid, "mgr-1")
    assert confirmed.status == ShiftStatus.CONFIRMED
    assert confirmed.actual_start_time is None

    with pytest.raises(AlreadyConfirmed):
        store.confirm_shift(sid, "mgr-1")


def test_unknown_shift_raises_not_found(container):
    with pytest.raises(NotFound):
        container.schedule_store.clock_in("missing", "s-1")


def test_concurrent_clock_in_has_one_winner(container, make_shift):
    store = container.schedule_store
    sid = make_shift()
    barrier = threading.Barrier(8)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            store.clock_in(sid, "s-1")
            outcome = "ok"
        except AlreadyStarted:
            outcome = "already_started"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("already_started") == 7


def test_lookup_by_range_is_inclusive_and_ordered(container, make_shift):
    make_shift(day=date(2024, 3, 12))
    make_shift(day=date(2024, 3, 10))
    make_shift(day=date(2024, 3, 14))
    make_shift(day=date(2024, 3, 11), staff_id="s-2")

    found = container.schedule_store.lookup_by_range(
        staff_id="s-1", hotel_id="h-1", start=date(2024, 3, 12), end=date(2024, 3, 10)
    )
    assert [s.schedule_day for s in found] == ["2024-03-10", "2024-03-12"]


def test_today_schedule(container, make_shift):
    make_shift(day=date(2024, 3, 14))
    sid = make_shift(day=date(2024, 3, 15))

    today = container.schedule_store.today_schedule(staff_id="s-1", hotel_id="h-1")
    assert today is not None and today.schedule_id == sid
    assert container.schedule_store.today_schedule(staff_id="s-9", hotel_id="h-1") is None


def test_model_rejects_end_before_start():
    with pytest.raises(ValidationError):
        ShiftSchedule(
            schedule_id="x",
            staff_id="s-1",
            hotel_id="h-1",
            schedule_date=date(2024, 3, 15),
            shift_type=ShiftType.MORNING,
            shift_start=time(7, 0),
            shift_end=time(15, 0),
            actual_start_time=datetime(2024, 3, 15, 9, 0),
            actual_end_time=datetime(2024, 3, 15, 9, 0) - timedelta(minutes=1),
        )
