from __future__ import annotations

import itertools
from datetime import datetime

import pytest

from budget_buddy.models import Bill, PaymentMethod, Recurrence, Transaction, TransactionType

_ids = itertools.count(1)


def make_tx(
    amount,
    when,
    tx_type='expense',
    category_id=None,
    name=None,
    note=None,
    method='card',
):
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    return Transaction(
        id=f"tx-{next(_ids)}",
        type=TransactionType(tx_type),
        amount=amount,
        date=when,
        category_id=category_id,
        category_name_snapshot=name,
        note=note,
        payment_method=PaymentMethod(method),
    )


def make_bill(due, paid_at=None, recurring='none', amount=50.0, name='Bill'):
    if isinstance(due, str):
        due = datetime.fromisoformat(due)
    if isinstance(paid_at, str):
        paid_at = datetime.fromisoformat(paid_at)
    return Bill(
        id=f"bill-{next(_ids)}",
        name=name,
        amount=amount,
        due_date=due,
        recurring=Recurrence(recurring),
        paid_at=paid_at,
    )


@pytest.fixture
def tx_factory():
    return make_tx


@pytest.fixture
def bill_factory():
    return make_bill
