"""Human-facing formatting of dates and money for messages and PDFs."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from django.conf import settings
from django.utils import timezone

NOT_AVAILABLE = "N/A"


def _local(value: Union[date, datetime]) -> Union[date, datetime]:
    if isinstance(value, datetime) and timezone.is_aware(value):
        return timezone.localtime(value)
    return value


def format_date(value: Optional[Union[date, datetime]]) -> str:
    """``Oct 9, 2026``"""
    if value is None:
        return NOT_AVAILABLE
    value = _local(value)
    return f"{value:%b} {value.day}, {value.year}"


def format_datetime(value: Optional[datetime]) -> str:
    """``Oct 9, 2026, 3:05 PM``"""
    if value is None:
        return NOT_AVAILABLE
    value = _local(value)
    hour = value.hour % 12 or 12
    return f"{format_date(value)}, {hour}:{value:%M %p}"


def format_amount(value: Optional[Decimal]) -> str:
    return f"{(value or Decimal('0')):.2f}"


def format_money(value: Optional[Decimal]) -> str:
    """``LKR 120.50`` (currency from settings)."""
    return f"{settings.CURRENCY} {format_amount(value)}"
