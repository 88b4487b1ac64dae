"""Formatting utilities for currency, dates and day labels."""

from __future__ import annotations

import logging
from datetime import date as date_type
from datetime import datetime, timedelta
from typing import Dict, List, Mapping, Optional, Union

import pandas as pd

from .config import get_default_currency, get_supported_currencies
from .models import TransactionType

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES: List[Dict[str, str]] = get_supported_currencies()


def as_day(value: date_type) -> date_type:
    """Calendar day of a ``date`` or ``datetime``."""
    return value.date() if isinstance(value, datetime) else value


def _month_abbr(value: date_type) -> str:
    return pd.Timestamp(value).month_name()[:3]


def _weekday_abbr(value: date_type) -> str:
    return pd.Timestamp(value).day_name()[:3]


def format_currency(amount: Union[float, int], include_sign: bool = True, symbol: str = '$') -> str:
    """Format a currency amount with proper formatting.

    Args:
        amount: The amount to format
        include_sign: Whether to include the currency symbol
        symbol: Symbol placed in front of the digits

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-5)
        '-$5.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = '-' if amount < 0 else ''
    return f"{prefix}{symbol}{formatted}" if include_sign else f"{prefix}{formatted}"


def format_signed_amount(amount: Union[float, int], tx_type: Union[TransactionType, str]) -> str:
    """Prefix an amount with ``+`` for income and ``-`` for expenses.

    Example:
        >>> format_signed_amount(12.5, 'expense')
        '-$12.50'
    """
    sign = '+' if TransactionType(tx_type) is TransactionType.INCOME else '-'
    return f"{sign}{format_currency(abs(amount))}"


def format_date(value: date_type) -> str:
    """``'Dec 28, 2025'``"""
    return f"{_month_abbr(value)} {value.day}, {value.year}"


def format_short_date(value: date_type) -> str:
    """``'Dec 28'``"""
    return f"{_month_abbr(value)} {value.day}"


def format_time(value: datetime) -> str:
    """12-hour clock without a leading zero, e.g. ``'3:05 PM'``."""
    hour = value.hour % 12 or 12
    meridiem = 'AM' if value.hour < 12 else 'PM'
    return f"{hour}:{value.minute:02d} {meridiem}"


def format_date_time(value: datetime) -> str:
    return f"{format_date(value)} {format_time(value)}"


def day_key(value: date_type) -> str:
    """Stable per-day key, e.g. ``'Mon Dec 15 2025'``."""
    return f"{_weekday_abbr(value)} {_month_abbr(value)} {value.day:02d} {value.year:04d}"


def relative_date_label(value: date_type, now: datetime) -> str:
    """``TODAY``, ``YESTERDAY`` or an upper-cased ``'MON, DEC 15'`` label."""
    day = as_day(value)
    today = as_day(now)
    if day == today:
        return 'TODAY'
    if day == today - timedelta(days=1):
        return 'YESTERDAY'
    return f"{_weekday_abbr(day)}, {_month_abbr(day)} {day.day}".upper()


# ---------------------------------------------------------------------------
# Currency conversion
# ---------------------------------------------------------------------------


def currency_symbol(code: Optional[str] = None) -> str:
    """Symbol for a supported currency code, ``'$'`` when unknown."""
    target = (code or get_default_currency()).upper()
    for currency in SUPPORTED_CURRENCIES:
        if currency['code'] == target:
            return currency['symbol']
    return '$'


def convert_amount(amount: float, rates: Optional[Mapping[str, float]], code: Optional[str] = None) -> float:
    """Convert a base-currency amount using a rates table keyed by code.

    A missing rate leaves the amount unchanged.
    """
    target = (code or get_default_currency()).upper()
    if not rates or not rates.get(target):
        logger.warning("Missing exchange rate for %s; showing base amount", target)
        return amount
    return amount * float(rates[target])


def format_price(amount: float, rates: Optional[Mapping[str, float]], code: Optional[str] = None) -> str:
    """Convert and format an amount in the user's display currency.

    Example:
        >>> format_price(10, {'USD': 1, 'EUR': 0.5}, 'EUR')
        '€5.00'
    """
    target = (code or get_default_currency()).upper()
    return format_currency(convert_amount(amount, rates, target), symbol=currency_symbol(target))
