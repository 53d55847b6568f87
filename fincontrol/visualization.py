"""Plotly visualisation helpers for the FinControl dashboard.

Each function accepts one of the aggregates produced by
:mod:`fincontrol.aggregation` (or :mod:`fincontrol.goals`) and returns a
``plotly.graph_objects.Figure`` ready for ``st.plotly_chart``. Empty inputs
produce an empty figure titled "Sem dados para exibir" rather than raising.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

try:
    from .formatting import PRIORITY_COLORS, PRIORITY_LABELS
    from .models import Priority
except ImportError:
    from formatting import PRIORITY_COLORS, PRIORITY_LABELS
    from models import Priority

EMPTY_TITLE = "Sem dados para exibir"
INCOME_COLOR = '#10b981'
EXPENSE_COLOR = '#f43f5e'
DEBT_COLOR = '#f59e0b'
CATEGORY_COLORS = ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884d8', '#82ca9d']


def _empty_figure(title: str | None = None) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title or EMPTY_TITLE)
    return fig


def create_monthly_trend_chart(monthly: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bars of income vs expense per month.

    Parameters
    ----------
    monthly : pandas.DataFrame
        Output of :func:`fincontrol.aggregation.compute_monthly_trend`.
    title : str, optional
        Chart title.
    """
    if monthly.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(name='Renda', x=monthly['Month_Label'], y=monthly['Income'], marker_color=INCOME_COLOR))
    fig.add_trace(go.Bar(name='Despesa', x=monthly['Month_Label'], y=monthly['Expense'], marker_color=EXPENSE_COLOR))
    fig.update_layout(
        title=title or "Fluxo Mensal (Renda vs Despesa)",
        xaxis_title="Mês",
        yaxis_title="Valor (R$)",
        barmode='group',
        hovermode='x unified',
    )
    return fig


def create_priority_donut(priority_totals: pd.Series, title: str | None = None) -> go.Figure:
    """Donut of obligation value per priority, always with all four slices in the legend."""
    if priority_totals.empty or priority_totals.sum() == 0:
        return _empty_figure(title)
    keys = [Priority(key) for key in priority_totals.index]
    fig = go.Figure(go.Pie(
        labels=[PRIORITY_LABELS[key] for key in keys],
        values=priority_totals.values,
        hole=0.6,
        marker=dict(colors=[PRIORITY_COLORS[key] for key in keys]),
        sort=False,
    ))
    fig.update_layout(title=title or "Despesas por Prioridade")
    return fig


def create_type_totals_chart(type_totals: pd.Series, title: str | None = None) -> go.Figure:
    """Bars for the Rendas / Despesas / Dívidas totals."""
    if type_totals.empty:
        return _empty_figure()
    df = type_totals.reset_index()
    df.columns = ["Tipo", "Valor"]
    fig = px.bar(
        df,
        x="Tipo",
        y="Valor",
        color="Tipo",
        color_discrete_sequence=[INCOME_COLOR, EXPENSE_COLOR, DEBT_COLOR],
    )
    fig.update_layout(title=title or "Visão Geral (Rendas x Despesas x Dívidas)", showlegend=False)
    return fig


def create_category_pie_chart(series: pd.Series, title: str | None = None) -> go.Figure:
    """Pie chart of obligation value per category."""
    if series.empty:
        return _empty_figure()
    df = series.reset_index()
    df.columns = ["Categoria", "Valor"]
    fig = px.pie(df, names="Categoria", values="Valor", color_discrete_sequence=CATEGORY_COLORS)
    fig.update_traces(textposition='inside', textinfo='percent+label')
    fig.update_layout(title=title or "Despesas por Categoria")
    return fig


def create_goal_progress_chart(progress: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Horizontal bars of each goal's funded percentage."""
    if progress.empty:
        return _empty_figure()
    fig = px.bar(progress, x='percentage', y='name', orientation='h', range_x=[0, 100])
    fig.update_layout(title=title or "Progresso das Metas", xaxis_title="%", yaxis_title="")
    return fig
