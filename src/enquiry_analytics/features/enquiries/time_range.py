"""Report time windows.

A report can be restricted to one calendar month (``filter=month``,
``value=YYYY-MM``) or one calendar year (``filter=year``, ``value=YYYY``).
Both become a half-open UTC range ``[start, end)``; the filter also decides
how the daily enquiry report buckets its rows.
"""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FilterMode(str, Enum):
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["FilterMode"]:
        """Returns the matching mode, or None for a missing or unknown filter."""
        try:
            return cls(raw)
        except ValueError:
            return None


class Granularity(str, Enum):
    DAY = "day"
    MONTH = "month"

    @property
    def date_format(self) -> str:
        # $dateToString format specifiers
        return "%Y-%m-%d" if self is Granularity.DAY else "%Y-%m"


@dataclass(frozen=True)
class TimeRange:
    start: datetime.datetime
    end: datetime.datetime
    mode: FilterMode

    @classmethod
    def for_month(cls, value: str) -> "TimeRange":
        year_part, _, month_part = value.strip().partition("-")
        year, month = int(year_part), int(month_part)
        start = datetime.datetime(year, month, 1, tzinfo=datetime.timezone.utc)
        if month == 12:
            end = datetime.datetime(year + 1, 1, 1, tzinfo=datetime.timezone.utc)
        else:
            end = datetime.datetime(year, month + 1, 1, tzinfo=datetime.timezone.utc)
        return cls(start=start, end=end, mode=FilterMode.MONTH)

    @classmethod
    def for_year(cls, value: str) -> "TimeRange":
        year = int(value.strip())
        return cls(
            start=datetime.datetime(year, 1, 1, tzinfo=datetime.timezone.utc),
            end=datetime.datetime(year + 1, 1, 1, tzinfo=datetime.timezone.utc),
            mode=FilterMode.YEAR,
        )

    @classmethod
    def build(cls, mode: FilterMode, value: str) -> "TimeRange":
        """Builds the range for ``mode``; raises ValueError on a malformed value."""
        if mode is FilterMode.MONTH:
            return cls.for_month(value)
        return cls.for_year(value)

    @property
    def granularity(self) -> Granularity:
        return Granularity.MONTH if self.mode is FilterMode.YEAR else Granularity.DAY


def granularity_for(time_range: Optional[TimeRange]) -> Granularity:
    """Unfiltered reports bucket by day, like month-filtered ones."""
    return time_range.granularity if time_range else Granularity.DAY
