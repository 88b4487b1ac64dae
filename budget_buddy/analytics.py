"""Monthly totals and category breakdowns for a set of transactions.

The functions here never filter by date: callers narrow the records to
a month first (see :func:`budget_buddy.months.transactions_in_month`)
and hand the window over.  That keeps the aggregation independent of
where the records came from.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from .config import OTHER_CATEGORY_ID, OTHER_CATEGORY_NAME, get_top_categories_count
from .models import (
    CategoryBreakdownEntry,
    MonthlyTotals,
    Transaction,
    TransactionType,
    records_to_frame,
)

BREAKDOWN_COLUMNS = ['category_id', 'category_name', 'amount', 'percentage']


class TransactionAnalytics:
    """Aggregations over a pre-filtered set of transactions."""

    def __init__(self, transactions: Iterable[Transaction]):
        self.transactions = list(transactions)
        self.data = records_to_frame(self.transactions)
        self._prepare_data()

    def _prepare_data(self) -> None:
        """Normalize amounts and resolve the "other" category bucket."""
        self.data['amount'] = pd.to_numeric(self.data['amount'], errors='coerce').fillna(0.0).astype(float)

        # Transactions without a category share one synthetic bucket; the
        # label is the snapshot captured at creation time, never a live lookup.
        missing_id = self.data['category_id'].isna()
        self.data['category_key'] = self.data['category_id'].where(~missing_id, OTHER_CATEGORY_ID)
        self.data['category_label'] = self.data['category_name'].where(
            self.data['category_name'].notna(), OTHER_CATEGORY_NAME
        )

    def _expense_rows(self) -> pd.DataFrame:
        return self.data[self.data['type'] == TransactionType.EXPENSE.value]

    def _income_rows(self) -> pd.DataFrame:
        return self.data[self.data['type'] == TransactionType.INCOME.value]

    def monthly_totals(self) -> MonthlyTotals:
        """Income, expense and net for the transactions held by this instance."""
        income = float(self._income_rows()['amount'].sum())
        expense = float(self._expense_rows()['amount'].sum())
        return MonthlyTotals(income=income, expense=expense, net=income - expense)

    def category_breakdown_frame(self) -> pd.DataFrame:
        """Expense totals per category with their share of total spending.

        Rows are sorted by amount, largest first; categories with equal
        amounts keep the order in which they were first seen.  When total
        spending is zero every percentage is zero.
        """
        expenses = self._expense_rows()
        if expenses.empty:
            return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

        grouped = (
            expenses.groupby('category_key', sort=False)
            .agg(category_name=('category_label', 'first'), amount=('amount', 'sum'))
            .reset_index()
            .rename(columns={'category_key': 'category_id'})
        )
        total = float(expenses['amount'].sum())
        if total > 0:
            grouped['percentage'] = grouped['amount'] / total * 100.0
        else:
            grouped['percentage'] = np.zeros(len(grouped))

        grouped = grouped.sort_values('amount', ascending=False, kind='mergesort')
        return grouped[BREAKDOWN_COLUMNS].reset_index(drop=True)

    def spent_by_category(self) -> List[CategoryBreakdownEntry]:
        frame = self.category_breakdown_frame()
        return [
            CategoryBreakdownEntry(
                category_id=str(row.category_id),
                category_name=str(row.category_name),
                amount=float(row.amount),
                percentage=float(row.percentage),
            )
            for row in frame.itertuples(index=False)
        ]

    def top_categories(self, n: Optional[int] = None) -> List[CategoryBreakdownEntry]:
        """Largest ``n`` categories; ``n`` defaults to the configured count.

        Raises:
            ValueError: If ``n`` is negative
        """
        limit = get_top_categories_count() if n is None else n
        if limit < 0:
            raise ValueError(f"Number of categories must not be negative, got {limit}")
        return self.spent_by_category()[:limit]


def monthly_totals(transactions: Iterable[Transaction]) -> MonthlyTotals:
    """Sum income and expenses; ``net = income - expense``.

    Example:
        >>> monthly_totals([])
        MonthlyTotals(income=0.0, expense=0.0, net=0.0)
    """
    return TransactionAnalytics(transactions).monthly_totals()


def spent_by_category(transactions: Iterable[Transaction]) -> List[CategoryBreakdownEntry]:
    return TransactionAnalytics(transactions).spent_by_category()


def category_breakdown_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    return TransactionAnalytics(transactions).category_breakdown_frame()


def top_categories(transactions: Iterable[Transaction], n: Optional[int] = None) -> List[CategoryBreakdownEntry]:
    """First ``n`` rows of :func:`spent_by_category` (all rows when fewer)."""
    return TransactionAnalytics(transactions).top_categories(n)
