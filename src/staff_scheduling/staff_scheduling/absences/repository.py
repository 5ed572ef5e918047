from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AbsenceStatus
from .model import AbsenceRequest


class AbsenceRepository(Protocol):
    def create(self, *, request: AbsenceRequest) -> str:
        raise NotImplementedError

    def get_by_id(self, *, request_id: str) -> Optional[AbsenceRequest]:
        raise NotImplementedError

    def list_for_staff(
        self,
        *,
        staff_id: str,
        hotel_id: Optional[str] = None,
        status: Optional[AbsenceStatus] = None,
        limit: int = 200,
    ) -> Sequence[AbsenceRequest]:
        """Newest first."""

        raise NotImplementedError

    def list_overlapping(
        self,
        *,
        staff_id: str,
        start: date,
        end: date,
        hotel_id: Optional[str] = None,
    ) -> Sequence[AbsenceRequest]:
        """Requests with start_date <= end AND end_date >= start."""

        raise NotImplementedError

    # Both updates only touch rows still in PENDING; False means the row is
    # gone or no longer pending.
    def update_notes(self, *, request_id: str, notes: Optional[str], at: datetime) -> bool:
        raise NotImplementedError

    def update_status(self, *, request_id: str, status: AbsenceStatus, at: datetime) -> bool:
        raise NotImplementedError

    def delete(self, *, request_id: str) -> bool:
        raise NotImplementedError
