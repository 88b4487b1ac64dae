"""Budget progress calculations.

This module compares a month's spending against the overall limit and the
per-category limits of a :class:`~budget_buddy.models.Budget`.  Progress
turns into a warning at a configurable share of the limit (80% by
default) and is marked exceeded from 100%.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import pandas as pd

from .analytics import TransactionAnalytics
from .config import get_budget_warning_percent
from .models import Budget, Transaction
from .months import transactions_in_month

STATUS_GOOD = 'good'
STATUS_WARNING = 'warning'
STATUS_EXCEEDED = 'exceeded'

SUMMARY_COLUMNS = [
    'Scope', 'Category ID', 'Limit', 'Spent', 'Remaining', 'Over By', 'Percent Used', 'Status',
]


@dataclass(frozen=True)
class BudgetProgress:
    spent: float
    limit: float
    percentage: float
    clamped_percentage: float
    remaining: float
    over_by: float
    status: str
    category_id: Optional[str] = None


def budget_progress(
    spent: float,
    limit: float,
    warning_threshold: Optional[float] = None,
    *,
    category_id: Optional[str] = None,
) -> BudgetProgress:
    """Calculate how much of a limit has been used.

    Args:
        spent: Amount spent in the period
        limit: Budget limit; zero or less means "no limit" and yields 0%
        warning_threshold: Percentage at which the status becomes ``warning``

    Returns:
        BudgetProgress with the raw and clamped percentage, the remaining
        amount (never negative), the overspend and the status.

    Example:
        >>> budget_progress(90, 100).status
        'warning'
    """
    threshold = get_budget_warning_percent() if warning_threshold is None else warning_threshold
    percentage = (spent / limit * 100.0) if limit > 0 else 0.0

    if percentage >= 100:
        status = STATUS_EXCEEDED
    elif percentage >= threshold:
        status = STATUS_WARNING
    else:
        status = STATUS_GOOD

    return BudgetProgress(
        spent=spent,
        limit=limit,
        percentage=percentage,
        clamped_percentage=min(percentage, 100.0),
        remaining=max(limit - spent, 0.0),
        over_by=max(spent - limit, 0.0),
        status=status,
        category_id=category_id,
    )


def _month_analytics(budget: Budget, transactions: Iterable[Transaction]) -> TransactionAnalytics:
    return TransactionAnalytics(transactions_in_month(transactions, budget.month_key))


def overall_progress(
    budget: Budget,
    transactions: Iterable[Transaction],
    warning_threshold: Optional[float] = None,
) -> Optional[BudgetProgress]:
    """Progress against the overall limit, ``None`` when no limit is set.

    Only transactions inside the budget's month count towards spending.
    """
    if not budget.has_overall_limit:
        return None
    spent = _month_analytics(budget, transactions).monthly_totals().expense
    return budget_progress(spent, budget.overall_limit, warning_threshold)


def category_progress(
    budget: Budget,
    transactions: Iterable[Transaction],
    warning_threshold: Optional[float] = None,
) -> List[BudgetProgress]:
    """One progress row per category limit, in the budget's order."""
    if not budget.category_limits:
        return []
    spending = _month_analytics(budget, transactions).category_breakdown_frame()
    spent_by_id = spending.set_index('category_id')['amount'] if not spending.empty else pd.Series(dtype=float)

    rows = []
    for category_id, limit in budget.category_limits.items():
        spent = float(spent_by_id.get(category_id, 0.0))
        rows.append(budget_progress(spent, limit, warning_threshold, category_id=category_id))
    return rows


def budget_summary_frame(
    budget: Budget,
    transactions: Iterable[Transaction],
    warning_threshold: Optional[float] = None,
) -> pd.DataFrame:
    """Tabulate overall and per-category progress for display."""
    records = list(transactions)
    rows = []
    overall = overall_progress(budget, records, warning_threshold)
    if overall is not None:
        rows.append(('Overall', None, overall))
    rows.extend(('Category', row.category_id, row) for row in category_progress(budget, records, warning_threshold))

    if not rows:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    return pd.DataFrame(
        [
            {
                'Scope': scope,
                'Category ID': category_id,
                'Limit': progress.limit,
                'Spent': progress.spent,
                'Remaining': progress.remaining,
                'Over By': progress.over_by,
                'Percent Used': round(progress.percentage, 1),
                'Status': progress.status,
            }
            for scope, category_id, progress in rows
        ],
        columns=SUMMARY_COLUMNS,
    )
