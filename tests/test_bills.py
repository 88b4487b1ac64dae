from datetime import date, datetime

import pytest

from budget_buddy.bills import (
    bill_status,
    format_due_date,
    group_by_status,
    mark_paid,
    mark_unpaid,
    next_monthly_due_date,
    outstanding_totals,
    status_label,
)
from budget_buddy.models import BillStatus


def test_status_examples_around_due_date(bill_factory) -> None:
    bill = bill_factory('2025-12-20')
    assert bill_status(bill, datetime(2025, 12, 25)) is BillStatus.OVERDUE
    assert bill_status(bill, datetime(2025, 12, 14)) is BillStatus.DUE_SOON
    assert bill_status(bill, datetime(2025, 12, 1)) is BillStatus.UPCOMING


def test_due_soon_window_is_inclusive(bill_factory) -> None:
    bill = bill_factory('2025-12-20T18:00')
    assert bill_status(bill, datetime(2025, 12, 13, 23, 0)) is BillStatus.DUE_SOON
    assert bill_status(bill, datetime(2025, 12, 12, 0, 0)) is BillStatus.UPCOMING
    assert bill_status(bill, datetime(2025, 12, 20, 23, 59)) is BillStatus.DUE_SOON
    assert bill_status(bill, datetime(2025, 12, 21, 0, 0)) is BillStatus.OVERDUE


def test_custom_due_soon_window(bill_factory) -> None:
    bill = bill_factory('2025-12-20')
    assert bill_status(bill, datetime(2025, 12, 14), due_soon_days=3) is BillStatus.UPCOMING


def test_due_soon_window_from_environment(monkeypatch, bill_factory) -> None:
    monkeypatch.setenv('BUDGETBUDDY_DUE_SOON_DAYS', '2')
    bill = bill_factory('2025-12-20')
    assert bill_status(bill, datetime(2025, 12, 17)) is BillStatus.UPCOMING
    assert bill_status(bill, datetime(2025, 12, 18)) is BillStatus.DUE_SOON


def test_paid_wins_over_dates(bill_factory) -> None:
    bill = bill_factory('2025-01-01', paid_at='2025-01-02T10:00')
    assert bill_status(bill, datetime(2025, 12, 25)) is BillStatus.PAID


def test_group_by_status_sorting(bill_factory) -> None:
    now = datetime(2025, 12, 10)
    late_overdue = bill_factory('2025-12-05', name='late')
    early_overdue = bill_factory('2025-11-20', name='early')
    soon = bill_factory('2025-12-12', name='soon')
    later = bill_factory('2026-02-01', name='later')
    upcoming = bill_factory('2025-12-30', name='upcoming')
    paid_old = bill_factory('2025-10-01', paid_at='2025-10-01T09:00', name='paid-old')
    paid_new = bill_factory('2025-11-01', paid_at='2025-11-02T09:00', name='paid-new')

    groups = group_by_status([late_overdue, paid_old, soon, later, early_overdue, upcoming, paid_new], now)

    assert [b.name for b in groups.overdue] == ['early', 'late']
    assert [b.name for b in groups.due_soon] == ['soon']
    assert [b.name for b in groups.upcoming] == ['upcoming', 'later']
    assert [b.name for b in groups.paid] == ['paid-new', 'paid-old']
    assert groups.for_status('dueSoon') == [soon]


def test_group_by_status_empty() -> None:
    groups = group_by_status([], datetime(2025, 12, 10))
    assert groups.overdue == groups.due_soon == groups.upcoming == groups.paid == []


def test_mark_paid_one_off_bill_keeps_paid_at(bill_factory) -> None:
    now = datetime(2025, 12, 10, 9, 30)
    bill = bill_factory('2025-12-12')
    paid = mark_paid(bill, now)
    assert paid.paid_at == now
    assert paid.due_date == bill.due_date
    assert bill.paid_at is None, "records are immutable"
    assert bill_status(paid, now) is BillStatus.PAID


def test_mark_paid_monthly_bill_advances_and_clears_paid(bill_factory) -> None:
    now = datetime(2025, 12, 10, 9, 30)
    bill = bill_factory('2025-12-12T08:00', recurring='monthly')
    paid = mark_paid(bill, now)
    assert paid.due_date == datetime(2026, 1, 12, 8, 0)
    assert paid.paid_at is None
    assert paid.last_paid_at == now
    assert bill_status(paid, now) is BillStatus.UPCOMING


def test_month_end_rollover_policies(bill_factory) -> None:
    bill = bill_factory('2025-01-31', recurring='monthly')
    now = datetime(2025, 1, 30)
    assert mark_paid(bill, now, policy='clamp').due_date == datetime(2025, 2, 28)
    assert mark_paid(bill, now, policy='rollover').due_date == datetime(2025, 3, 3)


def test_month_end_policy_from_environment(monkeypatch) -> None:
    monkeypatch.setenv('BUDGETBUDDY_MONTH_OVERFLOW', 'rollover')
    assert next_monthly_due_date(datetime(2024, 1, 31)) == datetime(2024, 3, 2)
    monkeypatch.setenv('BUDGETBUDDY_MONTH_OVERFLOW', 'clamp')
    assert next_monthly_due_date(datetime(2024, 1, 31)) == datetime(2024, 2, 29)


@pytest.mark.parametrize(
    'due, expected',
    [
        (datetime(2025, 12, 15, 7, 45), datetime(2026, 1, 15, 7, 45)),
        (datetime(2025, 3, 31), datetime(2025, 4, 30)),
        (datetime(2025, 2, 28), datetime(2025, 3, 28)),
    ],
)
def test_next_monthly_due_date_clamps(due, expected) -> None:
    assert next_monthly_due_date(due, 'clamp') == expected


def test_next_monthly_due_date_rejects_unknown_policy() -> None:
    with pytest.raises(ValueError):
        next_monthly_due_date(datetime(2025, 1, 1), 'nearest')


def test_mark_unpaid_does_not_revert_due_date(bill_factory) -> None:
    bill = bill_factory('2025-12-12', paid_at='2025-12-11T10:00')
    unpaid = mark_unpaid(bill)
    assert unpaid.paid_at is None
    assert unpaid.due_date == bill.due_date

    recurring = mark_paid(bill_factory('2025-12-12', recurring='monthly'), datetime(2025, 12, 11))
    assert mark_unpaid(recurring).due_date == datetime(2026, 1, 12)


def test_format_due_date() -> None:
    now = datetime(2025, 12, 20, 22, 0)
    assert format_due_date(datetime(2025, 12, 20, 6, 0), now) == 'Due Today'
    assert format_due_date(datetime(2025, 12, 21, 23, 0), now) == 'Due Tomorrow'
    assert format_due_date(datetime(2025, 12, 28), now) == 'Due Dec 28'
    assert format_due_date(datetime(2025, 12, 19), now) == 'Due Dec 19'
    assert format_due_date(datetime(2026, 1, 1), datetime(2025, 12, 31)) == 'Due Tomorrow'


def test_status_labels() -> None:
    assert status_label(BillStatus.DUE_SOON) == 'Due Soon'
    assert status_label('overdue') == 'Overdue'


def test_outstanding_totals(bill_factory) -> None:
    now = datetime(2025, 12, 10)
    bills = [
        bill_factory('2025-12-01', amount=10),
        bill_factory('2025-12-12', amount=20),
        bill_factory('2025-12-13', amount=5),
        bill_factory('2026-01-20', amount=100),
        bill_factory('2025-12-01', amount=999, paid_at='2025-12-01T10:00'),
    ]
    assert outstanding_totals(bills, now) == {'overdue': 10.0, 'dueSoon': 25.0, 'upcoming': 100.0}


def test_plain_date_due_dates(bill_factory) -> None:
    bill = bill_factory(date(2025, 12, 20))
    assert bill_status(bill, datetime(2025, 12, 14)) is BillStatus.DUE_SOON
    assert bill_status(bill, datetime(2025, 12, 21)) is BillStatus.OVERDUE
    assert format_due_date(date(2025, 12, 28), datetime(2025, 12, 20)) == 'Due Dec 28'
    assert format_due_date(date(2025, 12, 21), datetime(2025, 12, 20, 22, 0)) == 'Due Tomorrow'


def test_group_by_status_mixes_dates_and_datetimes(bill_factory) -> None:
    later = bill_factory(datetime(2025, 12, 18, 9, 0))
    sooner = bill_factory(date(2025, 12, 16))
    groups = group_by_status([later, sooner], datetime(2025, 12, 15))
    assert groups.due_soon == [sooner, later]


def test_next_monthly_due_date_keeps_plain_dates() -> None:
    assert next_monthly_due_date(date(2025, 1, 31), 'clamp') == date(2025, 2, 28)
    assert next_monthly_due_date(date(2025, 1, 31), 'rollover') == date(2025, 3, 3)
