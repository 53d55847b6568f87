from datetime import date

from fincontrol.aggregation import (
    compute_category_totals,
    compute_monthly_trend,
    compute_priority_totals,
    compute_totals,
    compute_type_breakdown,
    filter_by_profiles,
    ledger_frame,
)
from fincontrol.goals import compute_goal_progress, compute_goal_projection
from fincontrol.models import TransactionType
from fincontrol.payments import compute_payment_progress
from fincontrol.schedule import compute_recent, compute_upcoming


def test_empty_ledger_everywhere():
    today = date(2024, 6, 1)
    assert compute_totals([]) == {'income': 0.0, 'expense': 0.0, 'debt': 0.0, 'balance': 0.0}
    assert list(compute_type_breakdown([])) == [0.0, 0.0, 0.0]
    assert compute_monthly_trend([]).empty
    assert compute_category_totals([]).empty
    assert compute_priority_totals([]).sum() == 0
    assert ledger_frame([]).empty
    assert filter_by_profiles([], ['p1']) == []
    assert compute_upcoming([], today=today) == []
    assert compute_upcoming([], limit=None, today=today) == []
    assert compute_recent([]) == []
    assert compute_recent([], limit=None) == []
    assert compute_goal_progress([], today=today).empty


def test_zero_amounts_never_divide_by_zero(obligation):
    progress = compute_payment_progress(
        obligation('z', value=0, kind=TransactionType.DEBT, number_of_installments=3, installment_value=0)
    )
    assert progress.remaining_value == 0
    assert progress.amount_paid == 0
    projection = compute_goal_projection(0, 0, 0)
    assert projection.months_to_goal == 0
    assert projection.progress_percentage == 100
