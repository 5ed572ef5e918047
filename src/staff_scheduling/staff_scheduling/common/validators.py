from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

from ..core.exceptions import InvalidRange, ValidationError
from .datetime_utils import DateLike, format_local_date, to_local_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Notes must be text")
    return value.strip() or None


def require_date_range(start: DateLike, end: DateLike) -> Tuple[date, date]:
    start_d, end_d = to_local_date(start), to_local_date(end)
    if format_local_date(start_d) > format_local_date(end_d):
        raise InvalidRange()
    return start_d, end_d


def ordered_date_range(start: DateLike, end: DateLike) -> Tuple[date, date]:
    """Normalize two dates given in any order to (earliest, latest)."""
    start_d, end_d = to_local_date(start), to_local_date(end)
    if format_local_date(start_d) > format_local_date(end_d):
        return end_d, start_d
    return start_d, end_d
