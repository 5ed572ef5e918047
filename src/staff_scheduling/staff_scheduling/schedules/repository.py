from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus, ShiftType
from .model import ShiftSchedule


class ScheduleRepository(Protocol):
    def get_by_id(self, *, schedule_id: str) -> Optional[ShiftSchedule]:
        raise NotImplementedError

    def create(self, *, schedule: ShiftSchedule) -> str:
        """Insert a shift produced by the manager workflow.

        Returns schedule_id.
        """

        raise NotImplementedError

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
        """Shifts with start <= schedule_date <= end, ordered by date and start time."""

        raise NotImplementedError

    # Transitions are compare-and-swap: they return False when the row no
    # longer matches the expected state, so at most one caller wins.
    def mark_clocked_in(self, *, schedule_id: str, actor_id: str, at: datetime) -> bool:
        """SCHEDULED and not started -> CONFIRMED with actual start + confirmation set."""

        raise NotImplementedError

    def mark_clocked_out(self, *, schedule_id: str, at: datetime) -> bool:
        """CONFIRMED, started and not ended -> COMPLETED with actual end set."""

        raise NotImplementedError

    def mark_confirmed(self, *, schedule_id: str, actor_id: str, at: datetime) -> bool:
        """SCHEDULED and unconfirmed -> CONFIRMED, without touching actual times."""

        raise NotImplementedError
