"""Tests for amount and date display formatting."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from fiado.reports.formatting import format_currency, format_date, format_datetime, time_since


class TestFormatCurrency:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, "$ 0"),
            (300, "$ 300"),
            (1234, "$ 1.234"),
            (Decimal("1234.5"), "$ 1.234,5"),
            (Decimal("1234567.89"), "$ 1.234.567,89"),
            (Decimal("0.005"), "$ 0,01"),
            (Decimal("-200"), "-$ 200"),
            (Decimal("-0.004"), "$ 0"),
            (12.3, "$ 12,3"),
        ],
    )
    def test_format(self, amount, expected):
        assert format_currency(amount) == expected


class TestFormatDates:
    def test_format_date(self):
        assert format_date(datetime(2024, 1, 5, tzinfo=timezone.utc)) == "5 ene 2024"
        assert format_date(datetime(2023, 9, 30, tzinfo=timezone.utc)) == "30 sept 2023"

    def test_format_datetime(self):
        assert format_datetime(datetime(2024, 12, 5, 14, 30, tzinfo=timezone.utc)) == "5 dic 2024, 14:30"


class TestTimeSince:
    NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "days,expected",
        [
            (0, "hace 0 días"),
            (1, "hace 1 día"),
            (29, "hace 29 días"),
            (30, "hace 1 mes"),
            (64, "hace 2 meses y 4 días"),
            (365, "hace 1 año"),
            (400, "hace 1 año y 1 mes"),
            (800, "hace 2 años y 2 meses"),
        ],
    )
    def test_elapsed(self, days, expected):
        assert time_since(self.NOW - timedelta(days=days), now=self.NOW) == expected

    def test_defaults_to_now(self):
        assert time_since(datetime.now(timezone.utc) - timedelta(days=3)) == "hace 3 días"
