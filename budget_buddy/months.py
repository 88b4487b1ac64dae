"""Calendar-month keys and the date windows they describe.

A month key is the ``"YYYY-MM"`` token used to window transactions and to
key budgets.  Every helper here is pure; anything that depends on the
current time takes ``now`` explicitly.
"""

from __future__ import annotations

import calendar
import re
from datetime import date as date_type
from datetime import datetime
from typing import Iterable, List, Tuple

import pandas as pd

from .models import Transaction

MONTH_KEY_PATTERN = re.compile(r'([0-9]{4})-([0-9]{2})')


class InvalidFormat(ValueError):
    """Raised for month keys that are not exactly ``YYYY-MM`` with month 1-12."""


def month_key(value: date_type) -> str:
    """Return the ``"YYYY-MM"`` key of the month containing ``value``."""
    return f"{value.year:04d}-{value.month:02d}"


def current_month_key(now: datetime) -> str:
    return month_key(now)


def _split_key(key: str) -> Tuple[int, int]:
    match = MONTH_KEY_PATTERN.fullmatch(key) if isinstance(key, str) else None
    if match is None:
        raise InvalidFormat(f"Invalid month key {key!r}; expected 'YYYY-MM'")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidFormat(f"Invalid month key {key!r}; month must be between 01 and 12")
    return year, month


def parse_month_key(key: str) -> datetime:
    """First day of the month at local midnight.

    Raises:
        InvalidFormat: if ``key`` is not ``YYYY-MM`` with a month from 1 to 12.

    Example:
        >>> parse_month_key('2025-12')
        datetime.datetime(2025, 12, 1, 0, 0)
    """
    year, month = _split_key(key)
    return datetime(year, month, 1)


def month_range(key: str) -> Tuple[datetime, datetime]:
    """Return the first and last instant of the month.

    The end is 23:59:59.999 on the last calendar day, i.e. "day 0" of the
    following month.
    """
    start = parse_month_key(key)
    days_in_month = calendar.monthrange(start.year, start.month)[1]
    end = datetime(start.year, start.month, days_in_month, 23, 59, 59, 999000)
    return start, end


def _shift(key: str, months: int) -> str:
    year, month = _split_key(key)
    index = year * 12 + (month - 1) + months
    shifted_year, shifted_month = divmod(index, 12)
    if shifted_year < 1 or shifted_year > 9999:
        raise InvalidFormat(f"Month key {key!r} cannot be shifted by {months} month(s)")
    return f"{shifted_year:04d}-{shifted_month + 1:02d}"


def previous_month(key: str) -> str:
    """Month key one calendar month earlier (January rolls back to December)."""
    return _shift(key, -1)


def next_month(key: str) -> str:
    """Month key one calendar month later (December rolls over to January)."""
    return _shift(key, 1)


def format_month_display(key: str) -> str:
    """Human readable month, e.g. ``'December 2025'``."""
    start = pd.Timestamp(parse_month_key(key))
    return f"{start.month_name()} {start.year}"


def is_date_in_month(value: date_type, key: str) -> bool:
    return month_key(value) == key


def _start_of(value: date_type) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def transactions_in_month(transactions: Iterable[Transaction], key: str) -> List[Transaction]:
    """Keep transactions whose date falls inside the month window, in order."""
    start, end = month_range(key)
    return [tx for tx in transactions if start <= _start_of(tx.date) <= end]
