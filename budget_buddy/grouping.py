"""Day sections and list filters for transaction lists."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .formatting import as_day, day_key, relative_date_label
from .models import DayGroup, Transaction

ALL = 'all'


@dataclass(frozen=True)
class TransactionFilters:
    """Active list filters.  ``None``, ``'all'`` and blank search are no-ops."""

    type: Optional[str] = ALL
    category_id: Optional[str] = None
    payment_method: Optional[str] = ALL
    search: str = ''

    @classmethod
    def from_mapping(cls, filters: Optional[Mapping[str, Any]]) -> 'TransactionFilters':
        if not filters:
            return cls()
        return cls(
            type=filters.get('type', ALL),
            category_id=filters.get('categoryId', filters.get('category_id')),
            payment_method=filters.get('paymentMethod', filters.get('payment_method', ALL)),
            search=filters.get('search') or '',
        )


def _value(field_value: Any) -> Any:
    return getattr(field_value, 'value', field_value)


def group_by_day(transactions: Iterable[Transaction], now: datetime) -> List[DayGroup]:
    """Bucket transactions by local calendar day, most recent day first.

    Items inside a bucket keep their input order, so callers that pass a
    newest-first list get newest-first sections.
    """
    buckets: Dict[Any, DayGroup] = {}
    for tx in transactions:
        day = as_day(tx.date)
        group = buckets.get(day)
        if group is None:
            group = DayGroup(
                label=relative_date_label(day, now),
                date_key=day_key(day),
                date=tx.date,
                items=[],
            )
            buckets[day] = group
        group.items.append(tx)

    ordered_days = sorted(buckets, reverse=True)
    return [buckets[day] for day in ordered_days]


def filter_by_type(transactions: Iterable[Transaction], tx_type: Optional[str]) -> List[Transaction]:
    if not tx_type or tx_type == ALL:
        return list(transactions)
    return [tx for tx in transactions if _value(tx.type) == _value(tx_type)]


def filter_by_category(transactions: Iterable[Transaction], category_id: Optional[str]) -> List[Transaction]:
    if not category_id:
        return list(transactions)
    return [tx for tx in transactions if tx.category_id == category_id]


def filter_by_payment_method(transactions: Iterable[Transaction], method: Optional[str]) -> List[Transaction]:
    if not method or method == ALL:
        return list(transactions)
    return [tx for tx in transactions if _value(tx.payment_method) == _value(method)]


def search_transactions(transactions: Iterable[Transaction], query: Optional[str]) -> List[Transaction]:
    """Case-insensitive substring match on the category snapshot or the note."""
    if not query or not query.strip():
        return list(transactions)
    needle = query.lower()
    return [
        tx for tx in transactions
        if needle in (tx.category_name_snapshot or '').lower()
        or needle in (tx.note or '').lower()
    ]


def apply_filters(
    transactions: Iterable[Transaction],
    filters: Union[TransactionFilters, Mapping[str, Any], None],
) -> List[Transaction]:
    """Apply type, category, payment method and search filters in turn."""
    if not isinstance(filters, TransactionFilters):
        filters = TransactionFilters.from_mapping(filters)

    result = list(transactions)
    result = filter_by_type(result, filters.type)
    result = filter_by_category(result, filters.category_id)
    result = filter_by_payment_method(result, filters.payment_method)
    result = search_transactions(result, filters.search)
    return result
