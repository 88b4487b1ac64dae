"""Top-level package for the BudgetBuddy budgeting core.

The storage/sync layer hands over plain transaction, bill, category and
budget records; this package turns them into monthly aggregates, day
sections and bill classifications.  The primary modules are:

* ``months`` - ``"YYYY-MM"`` month keys, month windows and navigation
* ``analytics`` - income/expense totals and category breakdowns
* ``grouping`` - day sections and list filters
* ``bills`` - bill status, grouping and the paid/unpaid transitions
* ``budgets`` - progress against monthly limits
* ``visualization`` - Plotly figures for the statistics views

Every function that depends on the current time takes ``now`` as an
argument.
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import bills  # noqa: F401
from . import budgets  # noqa: F401
from . import grouping  # noqa: F401
from . import months  # noqa: F401
from .analytics import monthly_totals, spent_by_category, top_categories
from .bills import bill_status, format_due_date, group_by_status, mark_paid, mark_unpaid
from .grouping import TransactionFilters, apply_filters, group_by_day
from .models import (
    Bill,
    BillStatus,
    BillStatusGroups,
    Budget,
    Category,
    CategoryBreakdownEntry,
    DayGroup,
    InvalidRecord,
    MonthlyTotals,
    PaymentMethod,
    Recurrence,
    Transaction,
    TransactionType,
)
from .months import (
    InvalidFormat,
    format_month_display,
    month_key,
    month_range,
    next_month,
    parse_month_key,
    previous_month,
)

__version__ = '0.1.0'

__all__ = [
    'analytics',
    'bills',
    'budgets',
    'grouping',
    'months',
    'Bill',
    'BillStatus',
    'BillStatusGroups',
    'Budget',
    'Category',
    'CategoryBreakdownEntry',
    'DayGroup',
    'InvalidFormat',
    'InvalidRecord',
    'MonthlyTotals',
    'PaymentMethod',
    'Recurrence',
    'Transaction',
    'TransactionFilters',
    'TransactionType',
    'apply_filters',
    'bill_status',
    'format_due_date',
    'format_month_display',
    'group_by_day',
    'group_by_status',
    'mark_paid',
    'mark_unpaid',
    'month_key',
    'month_range',
    'monthly_totals',
    'next_month',
    'parse_month_key',
    'previous_month',
    'spent_by_category',
    'top_categories',
]
