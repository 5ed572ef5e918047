from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional

from ..common.datetime_utils import DateLike, format_local_date, now_local
from ..common.validators import optional_text, ordered_date_range, require_date_range, require_non_empty
from ..core.constants import DEFAULT_REQUEST_LIMIT
from ..core.enums import AbsenceStatus, AbsenceType
from ..core.exceptions import NotEditable, NotFound, ValidationError
from .model import AbsenceRequest
from .patch import AbsencePatch, ChangeStatus, EditNotes
from .repository import AbsenceRepository

logger = logging.getLogger(__name__)


class AbsenceStore:
    """Absence request lifecycle and date-range overlap queries.

    Overlaps are reported, never rejected: whether two requests may coexist
    is left to the reviewer. Only PENDING requests can be edited; delete has
    no status gate.
    """

    def __init__(self, requests: AbsenceRepository, *, clock: Callable[[], datetime] = now_local):
        self._requests = requests
        self._clock = clock

    def get(self, request_id: str) -> AbsenceRequest:
        req = self._requests.get_by_id(request_id=str(request_id))
        if not req:
            raise NotFound("Absence request not found")
        return req

    def submit(
        self,
        *,
        staff_id: str,
        hotel_id: str,
        request_type: AbsenceType | str,
        start_date: DateLike,
        end_date: DateLike,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AbsenceRequest:
        staff_id = require_non_empty(str(staff_id or ""), "Staff ID")
        hotel_id = require_non_empty(str(hotel_id or ""), "Hotel ID")
        try:
            request_type = AbsenceType(request_type)
        except ValueError:
            raise ValidationError("Please select a request type")
        start, end = require_date_range(start_date, end_date)

        now = now or self._clock()
        req = AbsenceRequest(
            request_id=str(uuid.uuid4()),
            staff_id=staff_id,
            hotel_id=hotel_id,
            request_type=request_type,
            start_date=start,
            end_date=end,
            status=AbsenceStatus.PENDING,
            notes=optional_text(notes),
            created_at=now,
            updated_at=now,
            data_processing_consent=True,
            consent_date=now,
        )
        self._requests.create(request=req)
        logger.info(
            "absence request %s submitted by %s (%s, %s..%s)",
            req.request_id,
            staff_id,
            request_type.value,
            format_local_date(start),
            format_local_date(end),
        )
        return req

    def update(self, request_id: str, patch: AbsencePatch, *, now: Optional[datetime] = None) -> AbsenceRequest:
        now = now or self._clock()
        current = self.get(request_id)
        if not current.is_editable:
            raise NotEditable()

        if isinstance(patch, EditNotes):
            applied = self._requests.update_notes(request_id=current.request_id, notes=patch.notes, at=now)
            updated = replace(current, notes=patch.notes, updated_at=now)
        elif isinstance(patch, ChangeStatus):
            applied = self._requests.update_status(request_id=current.request_id, status=patch.status, at=now)
            updated = replace(current, status=patch.status, updated_at=now)
        else:
            raise ValidationError(f"Unsupported change {patch!r}")

        if not applied:
            # Deleted or reviewed since we read it.
            self.get(request_id)
            raise NotEditable()

        if isinstance(patch, ChangeStatus):
            logger.info("absence request %s -> %s", current.request_id, patch.status.value)
        return updated

    def cancel(self, request_id: str, *, now: Optional[datetime] = None) -> AbsenceRequest:
        return self.update(request_id, ChangeStatus(AbsenceStatus.CANCELLED), now=now)

    def delete(self, request_id: str) -> bool:
        """Remove the request whatever its status. False if it was already gone."""
        removed = self._requests.delete(request_id=str(request_id))
        if removed:
            logger.info("absence request %s deleted", request_id)
        return removed

    def overlaps_range(
        self,
        staff_id: str,
        start: DateLike,
        end: DateLike,
        *,
        hotel_id: Optional[str] = None,
    ) -> List[AbsenceRequest]:
        start_d, end_d = ordered_date_range(start, end)
        rows = self._requests.list_overlapping(staff_id=str(staff_id), start=start_d, end=end_d, hotel_id=hotel_id)
        return [r for r in rows if r.overlaps(start_d, end_d)]

    def for_date(self, staff_id: str, day: DateLike, *, hotel_id: Optional[str] = None) -> List[AbsenceRequest]:
        return self.overlaps_range(staff_id, day, day, hotel_id=hotel_id)

    def list_requests(
        self,
        staff_id: str,
        *,
        hotel_id: Optional[str] = None,
        status: Optional[AbsenceStatus] = None,
        limit: int = DEFAULT_REQUEST_LIMIT,
    ) -> List[AbsenceRequest]:
        return list(self._requests.list_for_staff(staff_id=str(staff_id), hotel_id=hotel_id, status=status, limit=limit))

    def requests_by_status(self, staff_id: str, status: AbsenceStatus) -> List[AbsenceRequest]:
        return self.list_requests(staff_id, status=AbsenceStatus(status))
