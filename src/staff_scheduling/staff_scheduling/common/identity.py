from __future__ import annotations

from dataclasses import dataclass

from flask import session

from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaffIdentity:
    """Acting staff member, as provided by the session layer."""

    staff_id: str
    hotel_id: str


def current_identity() -> StaffIdentity:
    staff_id = session.get("staff_id")
    hotel_id = session.get("hotel_id")
    if not staff_id or not hotel_id:
        raise AuthenticationError()
    return StaffIdentity(staff_id=str(staff_id), hotel_id=str(hotel_id))
