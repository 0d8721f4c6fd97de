from datetime import date, datetime, timezone

import pytest

from dailydhan.utils.currency import format_currency, parse_amount
from dailydhan.utils.date_helpers import (
    add_months,
    add_years,
    file_timestamp,
    month_window,
    parse_date,
    shift_month,
)


class TestWindows:
    def test_month_window(self):
        assert month_window(2024, 2) == ("2024-02-01", "2024-03-01")
        assert month_window(2024, 12) == ("2024-12-01", "2025-01-01")

    def test_invalid_month(self):
        with pytest.raises(ValueError):
            month_window(2024, 13)

    def test_shift_month(self):
        assert shift_month(2024, 1, -1) == (2023, 12)
        assert shift_month(2024, 11, 3) == (2025, 2)
        assert shift_month(2024, 5, 0) == (2024, 5)


class TestParsing:
    def test_parse_date_accepts_timestamps(self):
        assert parse_date("2024-01-31T18:30:00.000Z") == date(2024, 1, 31)
        assert parse_date("") is None
        assert parse_date("31/01/2024") is None

    def test_add_months_clamps(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_add_years_leap_day(self):
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert add_years(date(2024, 2, 29), 4) == date(2028, 2, 29)

    def test_file_timestamp(self):
        moment = datetime(2024, 3, 5, 10, 15, 30, 123456, tzinfo=timezone.utc)
        assert file_timestamp(moment) == "2024-03-05T10-15-30-123Z"


class TestCurrency:
    def test_format_currency(self):
        assert format_currency(1234.5) == "₹1,234.50"
        assert format_currency(-20, "$") == "-$20.00"

    def test_parse_amount(self):
        assert parse_amount(" 2,500 ") == 2500
        with pytest.raises(ValueError, match="valid amount"):
            parse_amount("inf")
