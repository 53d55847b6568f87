import pandas as pd
import pytest

from fincontrol.aggregation import (
    compute_category_totals,
    compute_monthly_trend,
    compute_priority_totals,
    compute_totals,
    compute_type_breakdown,
    filter_by_profiles,
    ledger_frame,
    month_label,
)
from fincontrol.models import TransactionType


def test_totals_per_type(ledger):
    totals = compute_totals(ledger)
    assert totals['income'] == 5800
    assert totals['expense'] == 1500
    assert totals['debt'] == 3000
    assert totals['balance'] == totals['income'] - totals['expense'] - totals['debt']


def test_totals_of_empty_ledger():
    assert compute_totals([]) == {'income': 0.0, 'expense': 0.0, 'debt': 0.0, 'balance': 0.0}


def test_type_breakdown_labels(ledger):
    breakdown = compute_type_breakdown(ledger)
    assert list(breakdown.index) == ['Rendas', 'Despesas', 'Dívidas']
    assert breakdown['Dívidas'] == 3000


def test_priority_totals_always_has_four_buckets(ledger):
    totals = compute_priority_totals(ledger)
    assert list(totals.index) == ['CRITICAL', 'HIGH', 'MEDIUM', 'LOW']
    assert totals['CRITICAL'] == 3000
    assert totals['HIGH'] == 1200
    assert totals['MEDIUM'] == 0
    assert totals['LOW'] == 300
    assert totals.sum() == pytest.approx(1500 + 3000)


def test_priority_totals_empty_ledger():
    totals = compute_priority_totals([])
    assert list(totals.index) == ['CRITICAL', 'HIGH', 'MEDIUM', 'LOW']
    assert (totals == 0).all()


def test_monthly_trend_excludes_debts(ledger):
    monthly = compute_monthly_trend(ledger)
    assert list(monthly['Period_Key']) == ['2024-01', '2024-02']
    assert list(monthly['Month_Label']) == ['jan/24', 'fev/24']
    assert list(monthly['Income']) == [5000, 800]
    assert list(monthly['Expense']) == [1200, 300]


def test_monthly_trend_only_debts_is_empty(obligation):
    monthly = compute_monthly_trend([obligation('d1', 500, kind=TransactionType.DEBT)])
    assert monthly.empty
    assert 'Month_Label' in monthly.columns


def test_monthly_trend_skips_malformed_dates(income):
    monthly = compute_monthly_trend([income('a', 100, '2024-03-01'), income('b', 50, 'sem data')])
    assert list(monthly['Income']) == [100]
    # still counted in the totals
    assert compute_totals([income('a', 100, '2024-03-01'), income('b', 50, 'sem data')])['income'] == 150


def test_category_totals_sorted_descending(ledger):
    totals = compute_category_totals(ledger)
    assert list(totals.index) == ['Transporte', 'Moradia', 'Alimentação']
    assert totals.index.name == 'Category'


def test_category_totals_ignore_income(income):
    totals = compute_category_totals([income()])
    assert totals.empty


def test_uncategorized_obligation_goes_to_geral(obligation):
    totals = compute_category_totals([obligation('e1', 40, category=None)])
    assert totals['Geral'] == 40


def test_filter_by_profiles(ledger):
    assert filter_by_profiles(ledger) == ledger
    assert [txn.id for txn in filter_by_profiles(ledger, ['p2'])] == ['i2']
    assert filter_by_profiles(ledger, []) == []


def test_ledger_frame_columns(ledger):
    df = ledger_frame(ledger)
    assert len(df) == len(ledger)
    assert pd.api.types.is_datetime64_any_dtype(df['date'])
    assert df.loc[df['id'] == 'i1', 'priority'].isna().all()


def test_month_label():
    assert month_label(2026, 10) == 'out/26'
    assert month_label(2005, 1) == 'jan/05'


def test_monthly_trend_accepts_mixed_iso_forms(income):
    items = [
        income('a', 100, '2024-01-15'),
        income('b', 50, '2024-02-15T10:00:00'),
        income('c', 25, '2024-03-15T10:00:00+00:00'),
    ]
    monthly = compute_monthly_trend(items)
    assert list(monthly['Period_Key']) == ['2024-01', '2024-02', '2024-03']
    assert list(monthly['Income']) == [100, 50, 25]


def test_date_only_rows_survive_a_leading_datetime(income):
    items = [income('a', 10, '2024-05-01T08:30:00'), income('b', 20, '2024-05-20')]
    monthly = compute_monthly_trend(items)
    assert list(monthly['Income']) == [30]
    assert ledger_frame(items)['date'].notna().all()
