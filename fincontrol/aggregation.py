"""Ledger aggregation for the dashboard and BI views.

Every function takes a snapshot of transactions and returns a fresh result;
nothing is cached or mutated. Internally the snapshot is laid out as a
DataFrame (see :func:`ledger_frame`) so the folds are plain ``groupby`` calls.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

try:
    from .models import DEFAULT_CATEGORY, PRIORITY_ORDER, LedgerTransaction, Priority, TransactionType
    from .schedule import parse_date
except ImportError:
    from models import DEFAULT_CATEGORY, PRIORITY_ORDER, LedgerTransaction, Priority, TransactionType
    from schedule import parse_date

LEDGER_COLUMNS = [
    'id', 'profile_id', 'type', 'name', 'value', 'date', 'category',
    'priority', 'due_date', 'remaining_percentage',
]
MONTH_ABBREVIATIONS = ['jan', 'fev', 'mar', 'abr', 'mai', 'jun', 'jul', 'ago', 'set', 'out', 'nov', 'dez']
TYPE_LABELS = {
    TransactionType.INCOME.value: 'Rendas',
    TransactionType.EXPENSE.value: 'Despesas',
    TransactionType.DEBT.value: 'Dívidas',
}
OBLIGATION_VALUES = [TransactionType.EXPENSE.value, TransactionType.DEBT.value]


def filter_by_profiles(
    transactions: Iterable[LedgerTransaction],
    profile_ids: Optional[Iterable[str]] = None,
) -> List[LedgerTransaction]:
    """Keep transactions whose profile is selected; ``None`` keeps everything."""
    if profile_ids is None:
        return list(transactions)
    selected = set(profile_ids)
    return [txn for txn in transactions if txn.profile_id in selected]


def ledger_frame(transactions: Iterable[LedgerTransaction]) -> pd.DataFrame:
    """Tabular view of a transaction snapshot.

    ``date`` and ``due_date`` are parsed one value at a time with
    :func:`fincontrol.schedule.parse_date`, so every ISO form is accepted and
    malformed strings become ``NaT`` instead of raising. Obligation-only columns are
    ``None``/``NaN`` on incomes.
    """
    rows = []
    for txn in transactions:
        rows.append({
            'id': txn.id,
            'profile_id': txn.profile_id,
            'type': txn.type.value,
            'name': txn.name,
            'value': txn.value,
            'date': txn.date,
            'category': txn.category,
            'priority': txn.priority.value if txn.is_obligation else None,
            'due_date': txn.due_date if txn.is_obligation else None,
            'remaining_percentage': txn.remaining_percentage if txn.is_obligation else None,
        })
    df = pd.DataFrame(rows, columns=LEDGER_COLUMNS)
    df['value'] = pd.to_numeric(df['value'], errors='coerce').fillna(0.0).astype(float)
    df['date'] = pd.to_datetime(df['date'].map(parse_date), errors='coerce')
    df['due_date'] = pd.to_datetime(df['due_date'].map(parse_date), errors='coerce')
    df['category'] = df['category'].fillna(DEFAULT_CATEGORY).astype(str)
    df.loc[df['category'].str.strip() == '', 'category'] = DEFAULT_CATEGORY
    return df


def compute_totals(transactions: Iterable[LedgerTransaction]) -> Dict[str, float]:
    """Sum values per type.

    ``balance`` subtracts the full face value of debts, not what is still
    outstanding on them.
    """
    df = ledger_frame(transactions)
    by_type = df.groupby('type')['value'].sum()
    income = float(by_type.get(TransactionType.INCOME.value, 0.0))
    expense = float(by_type.get(TransactionType.EXPENSE.value, 0.0))
    debt = float(by_type.get(TransactionType.DEBT.value, 0.0))
    return {
        'income': income,
        'expense': expense,
        'debt': debt,
        'balance': income - expense - debt,
    }


def compute_type_breakdown(transactions: Iterable[LedgerTransaction]) -> pd.Series:
    """Totals per type as a labelled Series (Rendas, Despesas, Dívidas)."""
    totals = compute_totals(transactions)
    return pd.Series(
        [totals['income'], totals['expense'], totals['debt']],
        index=list(TYPE_LABELS.values()),
        name='Total',
    )


def month_label(year: int, month: int) -> str:
    """Short pt-BR month label, e.g. ``out/26``."""
    return f"{MONTH_ABBREVIATIONS[month - 1]}/{year % 100:02d}"


def compute_monthly_trend(transactions: Iterable[LedgerTransaction]) -> pd.DataFrame:
    """Monthly income vs expense series, oldest month first.

    Debts are liabilities rather than cash-flow events and never enter
    either series. Rows whose ``date`` cannot be parsed are skipped.
    """
    columns = ['Period_Key', 'Year', 'Month', 'Month_Label', 'Income', 'Expense']
    df = ledger_frame(transactions)
    flows = df[(df['type'] != TransactionType.DEBT.value) & df['date'].notna()].copy()
    if flows.empty:
        return pd.DataFrame(columns=columns)

    flows['Year'] = flows['date'].dt.year.astype(int)
    flows['Month'] = flows['date'].dt.month.astype(int)
    flows['Income'] = np.where(flows['type'] == TransactionType.INCOME.value, flows['value'], 0.0)
    flows['Expense'] = np.where(flows['type'] == TransactionType.EXPENSE.value, flows['value'], 0.0)

    monthly = (
        flows.groupby(['Year', 'Month'])[['Income', 'Expense']]
        .sum()
        .sort_index()
        .reset_index()
    )
    monthly['Period_Key'] = monthly.apply(lambda row: f"{int(row['Year'])}-{int(row['Month']):02d}", axis=1)
    monthly['Month_Label'] = monthly.apply(lambda row: month_label(int(row['Year']), int(row['Month'])), axis=1)
    return monthly[columns]


def compute_category_totals(transactions: Iterable[LedgerTransaction]) -> pd.Series:
    """EXPENSE+DEBT value per category, largest first."""
    df = ledger_frame(transactions)
    spending = df[df['type'].isin(OBLIGATION_VALUES)]
    if spending.empty:
        return pd.Series(dtype=float, name='Total')
    totals = spending.groupby('category')['value'].sum().sort_values(ascending=False)
    totals.index.name = 'Category'
    totals.name = 'Total'
    return totals


def compute_priority_totals(transactions: Iterable[LedgerTransaction]) -> pd.Series:
    """EXPENSE+DEBT value per priority.

    The index is always CRITICAL, HIGH, MEDIUM, LOW so chart legends stay
    stable even when some buckets are empty.
    """
    order = [priority.value for priority in PRIORITY_ORDER]
    df = ledger_frame(transactions)
    spending = df[df['type'].isin(OBLIGATION_VALUES)].copy()
    spending['priority'] = spending['priority'].fillna(Priority.MEDIUM.value)
    totals = spending.groupby('priority')['value'].sum().reindex(order).fillna(0.0).astype(float)
    totals.index.name = 'Priority'
    totals.name = 'Total'
    return totals
