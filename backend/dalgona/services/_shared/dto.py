"""Value objects shared by several services."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True, slots=True)
class DateRange:
    """
    Inclusive calendar-day range.

    :param start: First day included.
    :type start: datetime.date
    :param end: Last day included.
    :type end: datetime.date
    :raises ValueError: When ``end`` precedes ``start``.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("DateRange end must not precede start.")

    @classmethod
    def month(cls, year: int, month: int) -> DateRange:
        """Return the range covering every day of ``year``-``month``."""
        last_day = calendar.monthrange(year, month)[1]
        return cls(start=date(year, month, 1), end=date(year, month, last_day))

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end
