"""Tests for reporting ranges and accounting basis selection."""

from datetime import date

import pytest

from app.finance.periods import AccountingBasis, DateRange


class TestAccountingBasis:

    @pytest.mark.parametrize("raw", ["cash", "CASH", " Cash "])
    def test_cash(self, raw):
        assert AccountingBasis.from_request(raw) is AccountingBasis.CASH

    @pytest.mark.parametrize("raw", [None, "", "accrual", "kas", "cash-basis"])
    def test_anything_else_is_accrual(self, raw):
        assert AccountingBasis.from_request(raw) is AccountingBasis.ACCRUAL


class TestDateRange:

    def test_inclusive_day_count(self):
        assert DateRange(date(2024, 1, 1), date(2024, 1, 3)).days == 3

    def test_single_day(self):
        date_range = DateRange(date(2024, 1, 1), date(2024, 1, 1))
        assert date_range.days == 1
        assert list(date_range.iter_days()) == [date(2024, 1, 1)]

    def test_days_across_leap_february(self):
        date_range = DateRange(date(2024, 2, 27), date(2024, 3, 1))
        assert list(date_range.iter_days()) == [
            date(2024, 2, 27),
            date(2024, 2, 28),
            date(2024, 2, 29),
            date(2024, 3, 1),
        ]

    def test_reversed_range_rejected(self):
        with pytest.raises(ValueError):
            DateRange(date(2024, 1, 3), date(2024, 1, 1))

    def test_contains_and_offset(self):
        date_range = DateRange(date(2024, 1, 1), date(2024, 1, 31))
        assert date_range.contains(date(2024, 1, 1))
        assert date_range.contains(date(2024, 1, 31))
        assert not date_range.contains(date(2023, 12, 31))
        assert not date_range.contains(date(2024, 2, 1))
        assert date_range.offset(date(2024, 1, 31)) == 30
