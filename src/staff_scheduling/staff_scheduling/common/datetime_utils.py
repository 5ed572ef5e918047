from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import ValidationError

DateLike = Union[date, datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def to_local_date(value: DateLike) -> date:
    """Reduce a date, datetime or ISO string to a hotel-local calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # Full ISO datetimes reduce to their date part.
        if len(text) > 10 and text[10] in ("T", " "):
            text = text[:10]
        return parse_iso_date(text)
    raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def format_local_date(value: DateLike) -> str:
    """Calendar date as YYYY-MM-DD; date comparisons use this form."""
    return to_local_date(value).strftime(ISO_DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can inject a fixed clock.
    """
    return datetime.now()
