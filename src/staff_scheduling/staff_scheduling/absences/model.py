from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import DateLike, format_local_date
from ..core.enums import AbsenceStatus, AbsenceType
from ..core.exceptions import InvalidRange


@dataclass(frozen=True)
class AbsenceRequest:
    """Staff request to be away over an inclusive date range."""

    request_id: str
    staff_id: str
    hotel_id: str
    request_type: AbsenceType
    start_date: date
    end_date: date
    status: AbsenceStatus = AbsenceStatus.PENDING
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    data_processing_consent: bool = True
    consent_date: Optional[datetime] = None

    def __post_init__(self):
        if format_local_date(self.start_date) > format_local_date(self.end_date):
            raise InvalidRange()

    @property
    def is_editable(self) -> bool:
        return self.status == AbsenceStatus.PENDING

    def overlaps(self, start: DateLike, end: DateLike) -> bool:
        return (
            format_local_date(self.start_date) <= format_local_date(end)
            and format_local_date(self.end_date) >= format_local_date(start)
        )

    def covers(self, day: DateLike) -> bool:
        return self.overlaps(day, day)

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "staff_id": self.staff_id,
            "hotel_id": self.hotel_id,
            "request_type": self.request_type.value,
            "request_type_label": self.request_type.label,
            "start_date": format_local_date(self.start_date),
            "end_date": format_local_date(self.end_date),
            "status": self.status.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
