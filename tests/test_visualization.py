import pandas as pd

from fincontrol import visualization as viz
from fincontrol.aggregation import (
    compute_category_totals,
    compute_monthly_trend,
    compute_priority_totals,
    compute_type_breakdown,
)
from fincontrol.goals import compute_goal_progress


def test_empty_inputs_give_placeholder_figures():
    assert viz.create_monthly_trend_chart(compute_monthly_trend([])).layout.title.text == viz.EMPTY_TITLE
    assert viz.create_priority_donut(compute_priority_totals([])).layout.title.text == viz.EMPTY_TITLE
    assert viz.create_category_pie_chart(compute_category_totals([])).layout.title.text == viz.EMPTY_TITLE
    assert viz.create_goal_progress_chart(compute_goal_progress([])).layout.title.text == viz.EMPTY_TITLE
    assert viz.create_type_totals_chart(pd.Series(dtype=float)).layout.title.text == viz.EMPTY_TITLE


def test_monthly_trend_chart_has_income_and_expense(ledger):
    fig = viz.create_monthly_trend_chart(compute_monthly_trend(ledger))
    assert [trace.name for trace in fig.data] == ['Renda', 'Despesa']
    assert list(fig.data[0].x) == ['jan/24', 'fev/24']


def test_priority_donut_keeps_all_slices(ledger):
    fig = viz.create_priority_donut(compute_priority_totals(ledger))
    assert list(fig.data[0].labels) == ['Crítica', 'Alta', 'Média', 'Baixa']


def test_type_and_category_charts(ledger):
    assert len(viz.create_type_totals_chart(compute_type_breakdown(ledger)).data) == 3
    pie = viz.create_category_pie_chart(compute_category_totals(ledger))
    assert set(pie.data[0].labels) == {'Transporte', 'Moradia', 'Alimentação'}
