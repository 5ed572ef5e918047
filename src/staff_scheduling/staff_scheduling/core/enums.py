from __future__ import annotations

from enum import Enum


class ShiftType(str, Enum):
    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"
    EVENING = "EVENING"
    NIGHT = "NIGHT"
    SPLIT = "SPLIT"


class ShiftStatus(str, Enum):
    """Shift lifecycle: SCHEDULED -> CONFIRMED -> COMPLETED, CANCELLED is terminal."""

    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AbsenceType(str, Enum):
    VACATION = "vacation"
    SICK = "sick"
    PERSONAL = "personal"
    TRAINING = "training"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _ABSENCE_TYPE_LABELS[self]


_ABSENCE_TYPE_LABELS = {
    AbsenceType.VACATION: "Vacation",
    AbsenceType.SICK: "Sick Leave",
    AbsenceType.PERSONAL: "Personal",
    AbsenceType.TRAINING: "Training",
    AbsenceType.OTHER: "Other",
}


class AbsenceStatus(str, Enum):
    """Absence request review flow. Only PENDING is editable."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class ViewMode(str, Enum):
    MONTH = "month"
    WEEK = "week"


class Direction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"


class EventType(str, Enum):
    ABSENCE_SUBMITTED = "absence_submitted"
    SHIFT_CLOCKED_IN = "shift_clocked_in"
    SHIFT_CLOCKED_OUT = "shift_clocked_out"
    SHIFT_CONFIRMED = "shift_confirmed"
