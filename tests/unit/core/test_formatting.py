from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from modules.core.formatting import (
    NOT_AVAILABLE,
    format_amount,
    format_date,
    format_datetime,
    format_money,
)

pytestmark = pytest.mark.unit


class TestFormatDate:
    def test_plain_date(self):
        assert format_date(date(2026, 10, 9)) == "Oct 9, 2026"

    def test_aware_datetime_uses_local_time(self, settings):
        settings.TIME_ZONE = "Asia/Colombo"
        # 20:00 UTC is already the next day in Colombo (+05:30)
        value = datetime(2026, 10, 9, 20, 0, tzinfo=dt_timezone.utc)
        assert format_date(value) == "Oct 10, 2026"

    def test_missing(self):
        assert format_date(None) == NOT_AVAILABLE

    def test_datetime(self, settings):
        settings.TIME_ZONE = "UTC"
        value = datetime(2026, 10, 9, 15, 5, tzinfo=dt_timezone.utc)
        assert format_datetime(value) == "Oct 9, 2026, 3:05 PM"

    def test_midnight_is_twelve(self, settings):
        settings.TIME_ZONE = "UTC"
        value = datetime(2026, 1, 2, 0, 30, tzinfo=dt_timezone.utc)
        assert format_datetime(value) == "Jan 2, 2026, 12:30 AM"


class TestFormatMoney:
    def test_two_decimals(self):
        assert format_amount(Decimal("120.5")) == "120.50"

    def test_none_is_zero(self):
        assert format_amount(None) == "0.00"

    def test_currency_prefix(self, settings):
        settings.CURRENCY = "LKR"
        assert format_money(Decimal("75")) == "LKR 75.00"
