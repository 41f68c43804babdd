"""
Reporting Periods
Date range and accounting basis selected by the caller.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator, Optional


class AccountingBasis(str, Enum):
    """Which date attributes a document to a day."""

    CASH = "cash"
    ACCRUAL = "accrual"

    @classmethod
    def from_request(cls, value: Optional[str]) -> "AccountingBasis":
        """"cash" selects cash basis; anything else, including nothing, is accrual."""
        if isinstance(value, str) and value.strip().lower() == cls.CASH.value:
            return cls.CASH
        return cls.ACCRUAL


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive range of calendar days.

    Days are addressed by integer offset from ``start`` so bucket lookups
    never depend on date formatting or timezones.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Range start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @property
    def days(self) -> int:
        """Number of calendar days in the range, both ends included."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def offset(self, day: date) -> int:
        return (day - self.start).days

    def iter_days(self) -> Iterator[date]:
        for i in range(self.days):
            yield self.start + timedelta(days=i)
