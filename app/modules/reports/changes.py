"""
Period-over-period change calculations
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int]

HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")


def percent_change(current: Number, previous: Number) -> Decimal:
    """
    Percentage change from ``previous`` to ``current``.

    A zero previous value yields 100 when current is positive and 0 otherwise.
    """
    current = Decimal(current)
    previous = Decimal(previous)
    if previous == 0:
        return HUNDRED if current > 0 else Decimal("0")
    return (current - previous) / previous * HUNDRED


def share_of(part: Number, whole: Number) -> Decimal:
    """Percentage that ``part`` represents of ``whole`` (0 when whole is 0)."""
    whole = Decimal(whole)
    if whole == 0:
        return Decimal("0")
    return Decimal(part) / whole * HUNDRED


def round_percentage(value: Decimal) -> float:
    return float(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PeriodComparison:
    current: Decimal
    previous: Decimal

    @property
    def difference(self) -> Decimal:
        return self.current - self.previous

    @property
    def percentage(self) -> float:
        return round_percentage(percent_change(self.current, self.previous))
