"""
Period resolution for monthly reports

All boundaries are UTC midnights and every range is half-open: a record
belongs to a range when ``start <= fecha < end``.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Tuple

MONTH_PARAM_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    def contains(self, value: date) -> bool:
        return self.start_date <= value < self.end_date


@dataclass(frozen=True)
class PeriodSet:
    year: int
    month: int
    current_month: DateRange
    previous_month: DateRange
    current_year: DateRange
    previous_year: DateRange

    @property
    def month_key(self) -> str:
        return format_month_key(self.year, self.month)

    @property
    def previous_month_key(self) -> str:
        start = self.previous_month.start
        return format_month_key(start.year, start.month)


def format_month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def utc_month_start(year: int, month: int) -> datetime:
    """First instant of a month; ``month`` may fall outside 1..12 and rolls the year."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1, tzinfo=timezone.utc)


def parse_month_param(month_param: Optional[str]) -> Optional[Tuple[int, int]]:
    if not month_param:
        return None
    match = MONTH_PARAM_PATTERN.match(month_param.strip())
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    # previous and next year must stay inside datetime's range
    if not 2 <= year <= 9998 or not 1 <= month <= 12:
        return None
    return year, month


def resolve_periods(month_param: Optional[str] = None, now: Optional[datetime] = None) -> PeriodSet:
    """
    Resolve a ``YYYY-MM`` parameter into the four comparison ranges.

    Missing or malformed input falls back to the current UTC month.
    """
    parsed = parse_month_param(month_param)
    if parsed is None:
        now = now or datetime.now(timezone.utc)
        now = now.astimezone(timezone.utc) if now.tzinfo else now
        parsed = (now.year, now.month)
    year, month = parsed

    return PeriodSet(
        year=year,
        month=month,
        current_month=DateRange(utc_month_start(year, month), utc_month_start(year, month + 1)),
        previous_month=DateRange(utc_month_start(year, month - 1), utc_month_start(year, month)),
        current_year=DateRange(utc_month_start(year, 1), utc_month_start(year + 1, 1)),
        previous_year=DateRange(utc_month_start(year - 1, 1), utc_month_start(year, 1)),
    )
