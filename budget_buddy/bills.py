"""Bill status classification and the paid/unpaid transitions.

A bill is in exactly one of four states at a given instant:

* ``paid`` - ``paid_at`` is set.  Only one-off bills stay here; paying a
  monthly bill moves its due date forward and clears ``paid_at``.
* ``overdue`` - unpaid and due before today.
* ``dueSoon`` - unpaid and due between today and today + N days
  (inclusive, N defaults to 7).
* ``upcoming`` - unpaid and due later than that.

Comparisons use calendar days only; time of day is ignored.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional

import pandas as pd

from .config import get_due_soon_days, get_month_overflow_policy
from .config.settings import OVERFLOW_POLICIES
from .formatting import as_day, format_short_date
from .models import Bill, BillStatus, BillStatusGroups, Recurrence

logger = logging.getLogger(__name__)

STATUS_LABELS: Dict[BillStatus, str] = {
    BillStatus.PAID: 'Paid',
    BillStatus.OVERDUE: 'Overdue',
    BillStatus.DUE_SOON: 'Due Soon',
    BillStatus.UPCOMING: 'Upcoming',
}


def bill_status(bill: Bill, now: datetime, due_soon_days: Optional[int] = None) -> BillStatus:
    """Classify ``bill`` against the calendar day of ``now``."""
    if bill.paid_at is not None:
        return BillStatus.PAID

    window = get_due_soon_days() if due_soon_days is None else due_soon_days
    today = as_day(now)
    due = as_day(bill.due_date)

    if due < today:
        return BillStatus.OVERDUE
    if due <= today + timedelta(days=window):
        return BillStatus.DUE_SOON
    return BillStatus.UPCOMING


def status_label(status: BillStatus) -> str:
    return STATUS_LABELS[BillStatus(status)]


def group_by_status(bills: Iterable[Bill], now: datetime, due_soon_days: Optional[int] = None) -> BillStatusGroups:
    """Partition bills by status.

    Unpaid groups are ordered by due date, soonest first; paid bills are
    ordered by payment time, most recent first.
    """
    groups = BillStatusGroups()
    for bill in bills:
        groups.for_status(bill_status(bill, now, due_soon_days)).append(bill)

    groups.overdue.sort(key=lambda bill: pd.Timestamp(bill.due_date))
    groups.due_soon.sort(key=lambda bill: pd.Timestamp(bill.due_date))
    groups.upcoming.sort(key=lambda bill: pd.Timestamp(bill.due_date))
    groups.paid.sort(key=lambda bill: pd.Timestamp(bill.paid_at), reverse=True)
    return groups


def outstanding_totals(bills: Iterable[Bill], now: datetime, due_soon_days: Optional[int] = None) -> Dict[str, float]:
    """Sum of unpaid bill amounts per status, keyed by status value."""
    totals = {status.value: 0.0 for status in (BillStatus.OVERDUE, BillStatus.DUE_SOON, BillStatus.UPCOMING)}
    for bill in bills:
        status = bill_status(bill, now, due_soon_days)
        if status is not BillStatus.PAID:
            totals[status.value] += bill.amount
    return totals


def next_monthly_due_date(due_date: datetime, policy: Optional[str] = None) -> datetime:
    """Advance a due date by one calendar month, keeping the time of day.

    When the day of month does not exist in the next month the result
    depends on ``policy``:

    * ``'clamp'`` - use the last day of the next month (Jan 31 -> Feb 28).
    * ``'rollover'`` - spill the missing days into the month after
      (Jan 31 2025 -> Mar 3 2025), matching plain "set month + 1" date
      arithmetic.

    A plain ``date`` comes back as a ``date``.
    """
    policy = (policy or get_month_overflow_policy()).lower()
    if policy not in OVERFLOW_POLICIES:
        raise ValueError(f"Unknown month overflow policy '{policy}'")

    if policy == 'clamp':
        shifted = (pd.Timestamp(due_date) + pd.DateOffset(months=1)).to_pydatetime()
        return shifted if isinstance(due_date, datetime) else shifted.date()

    year, month_index = divmod(due_date.year * 12 + due_date.month, 12)
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    if due_date.day <= last_day:
        return due_date.replace(year=year, month=month)
    overflow = due_date.day - last_day
    return due_date.replace(year=year, month=month, day=last_day) + timedelta(days=overflow)


def mark_paid(bill: Bill, now: datetime, policy: Optional[str] = None) -> Bill:
    """Return the bill after the user marks it paid at ``now``.

    One-off bills keep ``paid_at = now``.  Monthly bills move to their next
    due date and become unpaid again; the payment is kept as
    ``last_paid_at``.
    """
    if Recurrence(bill.recurring) is Recurrence.MONTHLY:
        next_due = next_monthly_due_date(bill.due_date, policy)
        logger.debug("Bill %s paid; next due %s", bill.id, as_day(next_due))
        return replace(bill, due_date=next_due, paid_at=None, last_paid_at=now)

    logger.debug("Bill %s paid at %s", bill.id, now)
    return replace(bill, paid_at=now)


def mark_unpaid(bill: Bill) -> Bill:
    """Clear ``paid_at``.  An already advanced due date is not reverted."""
    return replace(bill, paid_at=None)


def format_due_date(due_date: datetime, now: datetime) -> str:
    """``'Due Today'``, ``'Due Tomorrow'`` or ``'Due Dec 28'``."""
    today = as_day(now)
    due = as_day(due_date)
    if due == today:
        return 'Due Today'
    if due == today + timedelta(days=1):
        return 'Due Tomorrow'
    return f"Due {format_short_date(due)}"
