from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import format_local_date
from ..core.enums import ShiftStatus, ShiftType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ShiftSchedule:
    """One day's assigned work period for a staff member.

    Created in SCHEDULED status by the manager workflow; afterwards it only
    changes through ScheduleStore transitions.
    """

    schedule_id: str
    staff_id: str
    hotel_id: str
    schedule_date: date
    shift_type: ShiftType
    shift_start: time
    shift_end: time
    status: ShiftStatus = ShiftStatus.SCHEDULED
    is_confirmed: bool = False
    confirmed_at: Optional[datetime] = None
    confirmed_by: Optional[str] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None
    break_duration: Optional[timedelta] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.actual_end_time is not None:
            if self.actual_start_time is None or self.actual_end_time < self.actual_start_time:
                raise ValidationError("Shift end time cannot be before its start time")

        confirmation = (self.confirmed_at is not None, self.confirmed_by is not None)
        if self.is_confirmed and not all(confirmation):
            raise ValidationError("Confirmed shift is missing confirmation details")
        if not self.is_confirmed and any(confirmation):
            raise ValidationError("Unconfirmed shift cannot carry confirmation details")

    @property
    def schedule_day(self) -> str:
        return format_local_date(self.schedule_date)

    @property
    def is_started(self) -> bool:
        return self.actual_start_time is not None

    @property
    def is_ended(self) -> bool:
        return self.actual_end_time is not None

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "staff_id": self.staff_id,
            "hotel_id": self.hotel_id,
            "schedule_date": self.schedule_day,
            "shift_type": self.shift_type.value,
            "shift_start": self.shift_start.strftime("%H:%M"),
            "shift_end": self.shift_end.strftime("%H:%M"),
            "status": self.status.value,
            "is_confirmed": self.is_confirmed,
            "confirmed_at": self.confirmed_at.isoformat() if self.confirmed_at else None,
            "confirmed_by": self.confirmed_by,
            "actual_start_time": self.actual_start_time.isoformat() if self.actual_start_time else None,
            "actual_end_time": self.actual_end_time.isoformat() if self.actual_end_time else None,
            "break_minutes": int(self.break_duration.total_seconds() // 60) if self.break_duration else None,
            "notes": self.notes,
        }
