from datetime import date, datetime

from fincontrol.schedule import (
    DUE_TODAY,
    OVERDUE,
    UPCOMING,
    classify_due_status,
    compute_recent,
    compute_upcoming,
    parse_date,
)


def test_upcoming_skips_paid_and_undated(ledger, today):
    upcoming = compute_upcoming(ledger, today=today)
    assert [item.transaction.id for item in upcoming] == ['e1', 'd1']
    assert [item.status for item in upcoming] == [OVERDUE, UPCOMING]


def test_upcoming_sorted_ascending_and_limited(obligation, today):
    items = [
        obligation('a', due_date='2024-03-10'),
        obligation('b', due_date='2024-02-20'),
        obligation('c', due_date='2024-01-01'),
    ]
    upcoming = compute_upcoming(items, limit=2, today=today)
    assert [item.transaction.id for item in upcoming] == ['c', 'b']
    assert upcoming[1].status == DUE_TODAY
    assert len(compute_upcoming(items, limit=None, today=today)) == 3


def test_missing_remaining_counts_as_outstanding(obligation, today):
    upcoming = compute_upcoming([obligation('a', value=250, due_date='2024-03-01')], today=today)
    assert len(upcoming) == 1
    assert upcoming[0].remaining_value == 250


def test_remaining_value_uses_percentage(obligation, today):
    upcoming = compute_upcoming(
        [obligation('a', value=1000, due_date='2024-03-01', remaining_percentage=40)], today=today
    )
    assert upcoming[0].remaining_value == 400


def test_malformed_due_date_excluded(obligation, today):
    assert compute_upcoming([obligation('a', due_date='31/02/xx')], today=today) == []


def test_income_never_upcoming(income, today):
    assert compute_upcoming([income()], today=today) == []


def test_classify_due_status_ignores_time_of_day():
    today = date(2024, 5, 1)
    assert classify_due_status(date(2024, 4, 30), today) == OVERDUE
    assert classify_due_status(parse_date(datetime(2024, 5, 1, 23, 59)), today) == DUE_TODAY
    assert classify_due_status(date(2024, 5, 2), today) == UPCOMING


def test_parse_date():
    assert parse_date('2024-02-29') == date(2024, 2, 29)
    assert parse_date('') is None
    assert parse_date(None) is None
    assert parse_date('not a date') is None


def test_recent_newest_first(ledger):
    recent = compute_recent(ledger, limit=3)
    assert [txn.id for txn in recent] == ['e2', 'i2', 'd1']


def test_recent_unknown_dates_last(income):
    items = [income('a', txn_date='???'), income('b', txn_date='2024-01-01'), income('c', txn_date='2024-06-01')]
    assert [txn.id for txn in compute_recent(items, limit=None)] == ['c', 'b', 'a']
