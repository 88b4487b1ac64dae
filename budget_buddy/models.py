"""Typed records exchanged with the storage layer.

The storage/sync layer hands over plain documents (camelCase keys,
timestamps in whatever shape the backend produced).  This module turns
them into frozen dataclasses with explicit optional fields so the
aggregation code never has to guess what a missing value means.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_type
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd


class InvalidRecord(ValueError):
    """A storage record could not be turned into a typed record."""


class TransactionType(str, Enum):
    INCOME = 'income'
    EXPENSE = 'expense'


class PaymentMethod(str, Enum):
    CASH = 'cash'
    CARD = 'card'


class Recurrence(str, Enum):
    MONTHLY = 'monthly'
    NONE = 'none'


class BillStatus(str, Enum):
    PAID = 'paid'
    OVERDUE = 'overdue'
    DUE_SOON = 'dueSoon'
    UPCOMING = 'upcoming'


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------


def to_datetime(value: Any, field_name: str = 'date') -> datetime:
    """Coerce a backend timestamp into a naive local ``datetime``.

    Accepts ``datetime``/``date`` objects, ISO strings, pandas timestamps,
    epoch milliseconds and SDK timestamp objects exposing ``toDate()`` or
    ``to_datetime()``.  Timezone-aware values are converted to local time.
    """
    if value is None:
        raise InvalidRecord(f"Missing timestamp for '{field_name}'")
    if hasattr(value, 'toDate'):
        value = value.toDate()
    elif hasattr(value, 'to_datetime') and not isinstance(value, (datetime, date_type)):
        value = value.to_datetime()
    if isinstance(value, bool):
        raise InvalidRecord(f"Invalid timestamp for '{field_name}': {value!r}")
    try:
        if isinstance(value, (int, float)):
            stamp = pd.to_datetime(value, unit='ms', utc=True)
        else:
            stamp = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError) as exc:
        raise InvalidRecord(f"Invalid timestamp for '{field_name}': {value!r}") from exc
    if pd.isna(stamp):
        raise InvalidRecord(f"Invalid timestamp for '{field_name}': {value!r}")
    result = stamp.to_pydatetime()
    if result.tzinfo is not None:
        result = result.astimezone().replace(tzinfo=None)
    return result


def _optional_datetime(value: Any, field_name: str) -> Optional[datetime]:
    if value is None:
        return None
    return to_datetime(value, field_name)


def _amount(value: Any, field_name: str = 'amount') -> float:
    if value is None or isinstance(value, bool):
        raise InvalidRecord(f"Missing or invalid '{field_name}': {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecord(f"Invalid '{field_name}': {value!r}") from exc


def _enum(enum_cls, value: Any, default):
    if value is None or value == '':
        return default
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ', '.join(member.value for member in enum_cls)
        raise InvalidRecord(f"Unknown {enum_cls.__name__} {value!r}; expected one of {allowed}") from exc


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _required(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    raise InvalidRecord(f"Record is missing required field '{keys[0]}'")


# ---------------------------------------------------------------------------
# Stored entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transaction:
    """A single recorded cash movement.  ``amount`` is stored positive."""

    id: str
    type: TransactionType
    amount: float
    date: datetime
    category_id: Optional[str] = None
    category_name_snapshot: Optional[str] = None
    note: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CARD

    @property
    def signed_amount(self) -> float:
        return self.amount if TransactionType(self.type) is TransactionType.INCOME else -self.amount

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Transaction':
        return cls(
            id=str(_required(record, 'id')),
            type=_enum(TransactionType, record.get('type'), TransactionType.EXPENSE),
            amount=_amount(record.get('amount')),
            date=to_datetime(record.get('date'), 'date'),
            category_id=_optional_text(record.get('categoryId', record.get('category_id'))),
            category_name_snapshot=_optional_text(
                record.get('categoryNameSnapshot', record.get('category_name_snapshot'))
            ),
            note=_optional_text(record.get('note')),
            payment_method=_enum(
                PaymentMethod,
                record.get('paymentMethod', record.get('payment_method')),
                PaymentMethod.CARD,
            ),
        )


@dataclass(frozen=True)
class Bill:
    """A one-off or monthly obligation with a due date."""

    id: str
    name: str
    amount: float
    due_date: datetime
    recurring: Recurrence = Recurrence.NONE
    paid_at: Optional[datetime] = None
    last_paid_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.paid_at is not None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Bill':
        return cls(
            id=str(_required(record, 'id')),
            name=str(record.get('name') or ''),
            amount=_amount(record.get('amount')),
            due_date=to_datetime(_required(record, 'dueDate', 'due_date'), 'dueDate'),
            recurring=_enum(Recurrence, record.get('recurring'), Recurrence.NONE),
            paid_at=_optional_datetime(record.get('paidAt', record.get('paid_at')), 'paidAt'),
            last_paid_at=_optional_datetime(
                record.get('lastPaidAt', record.get('last_paid_at')), 'lastPaidAt'
            ),
        )


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str = ''
    color: str = ''
    is_default: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Category':
        return cls(
            id=str(_required(record, 'id')),
            name=str(_required(record, 'name')),
            icon=str(record.get('icon') or ''),
            color=str(record.get('color') or ''),
            is_default=bool(record.get('isDefault', record.get('is_default', False))),
        )


@dataclass(frozen=True)
class Budget:
    """Monthly spending plan.  An ``overall_limit`` of 0 means no limit is set."""

    month_key: str
    overall_limit: float = 0.0
    category_limits: Dict[str, float] = field(default_factory=dict)

    @property
    def has_overall_limit(self) -> bool:
        return self.overall_limit > 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Budget':
        limits = (
            record.get('categoryLimits')
            or record.get('perCategoryLimits')
            or record.get('category_limits')
            or {}
        )
        if not isinstance(limits, Mapping):
            raise InvalidRecord(f"Category limits must be a mapping, got {type(limits).__name__}")
        overall = record.get('overallLimit', record.get('overall_limit'))
        return cls(
            month_key=str(_required(record, 'monthKey', 'month_key')),
            overall_limit=_amount(overall, 'overallLimit') if overall is not None else 0.0,
            category_limits={str(cat): _amount(limit, 'categoryLimits') for cat, limit in limits.items()},
        )


# ---------------------------------------------------------------------------
# Derived output structures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MonthlyTotals:
    income: float = 0.0
    expense: float = 0.0
    net: float = 0.0


@dataclass(frozen=True)
class CategoryBreakdownEntry:
    category_id: str
    category_name: str
    amount: float
    percentage: float


@dataclass(frozen=True)
class DayGroup:
    label: str
    date_key: str
    date: datetime
    items: List[Transaction] = field(default_factory=list)


@dataclass(frozen=True)
class BillStatusGroups:
    overdue: List[Bill] = field(default_factory=list)
    due_soon: List[Bill] = field(default_factory=list)
    upcoming: List[Bill] = field(default_factory=list)
    paid: List[Bill] = field(default_factory=list)

    def for_status(self, status: BillStatus) -> List[Bill]:
        return {
            BillStatus.OVERDUE: self.overdue,
            BillStatus.DUE_SOON: self.due_soon,
            BillStatus.UPCOMING: self.upcoming,
            BillStatus.PAID: self.paid,
        }[BillStatus(status)]


# ---------------------------------------------------------------------------
# Bulk helpers
# ---------------------------------------------------------------------------


def load_transactions(records: Iterable[Mapping[str, Any]]) -> List[Transaction]:
    return [Transaction.from_record(record) for record in records]


def load_bills(records: Iterable[Mapping[str, Any]]) -> List[Bill]:
    return [Bill.from_record(record) for record in records]


def load_categories(records: Iterable[Mapping[str, Any]]) -> List[Category]:
    return [Category.from_record(record) for record in records]


TRANSACTION_COLUMNS = ['id', 'type', 'amount', 'category_id', 'category_name', 'date']


def records_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Tabulate transactions in input order for the analytics layer."""
    rows = [
        {
            'id': tx.id,
            'type': TransactionType(tx.type).value,
            'amount': float(tx.amount),
            'category_id': tx.category_id,
            'category_name': tx.category_name_snapshot,
            'date': tx.date,
        }
        for tx in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)
