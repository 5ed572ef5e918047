"""Mutations a requester or reviewer can apply to a pending absence request.

A patch is either a notes edit or a status change, never both, so each can
be validated on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..common.validators import optional_text
from ..core.enums import AbsenceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class EditNotes:
    notes: Optional[str]

    def __post_init__(self):
        object.__setattr__(self, "notes", optional_text(self.notes))


@dataclass(frozen=True)
class ChangeStatus:
    status: AbsenceStatus

    def __post_init__(self):
        try:
            status = AbsenceStatus(self.status)
        except ValueError:
            raise ValidationError(f"Unknown request status {self.status!r}")
        if status == AbsenceStatus.PENDING:
            raise ValidationError("A request cannot be moved back to pending")
        object.__setattr__(self, "status", status)


AbsencePatch = Union[EditNotes, ChangeStatus]


def patch_from_payload(payload: dict) -> AbsencePatch:
    """Build a patch from a JSON body carrying exactly one of notes/status."""
    has_notes = "notes" in payload
    has_status = "status" in payload
    if has_notes == has_status:
        raise ValidationError("Provide either notes or status")
    if has_notes:
        return EditNotes(notes=payload.get("notes"))
    return ChangeStatus(status=payload.get("status"))
