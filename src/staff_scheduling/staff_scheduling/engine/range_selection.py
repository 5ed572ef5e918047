from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import DateLike, format_local_date, to_local_date
from ..common.validators import ordered_date_range


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def contains(self, day: DateLike) -> bool:
        return format_local_date(self.start) <= format_local_date(day) <= format_local_date(self.end)

    def is_start(self, day: DateLike) -> bool:
        return format_local_date(day) == format_local_date(self.start)

    def is_end(self, day: DateLike) -> bool:
        return format_local_date(day) == format_local_date(self.end)

    def to_dict(self) -> dict:
        return {"start": format_local_date(self.start), "end": format_local_date(self.end)}


class RangeSelection:
    """Two-click date range picker.

    idle --press(d)--> armed(d) --press(e)--> idle, emitting (min(d, e), max(d, e)).
    """

    def __init__(self) -> None:
        self._start: Optional[date] = None

    @property
    def is_armed(self) -> bool:
        return self._start is not None

    @property
    def start(self) -> Optional[date]:
        return self._start

    def press(self, day: DateLike) -> Optional[DateRange]:
        if self._start is None:
            self._start = to_local_date(day)
            return None

        start, end = ordered_date_range(self._start, day)
        self._start = None
        return DateRange(start=start, end=end)

    def reset(self) -> None:
        self._start = None
