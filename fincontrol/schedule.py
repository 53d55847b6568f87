"""Due-date view of outstanding obligations and the recent-activity feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Optional

import pandas as pd

try:
    from .models import LedgerTransaction, ObligationTransaction
    from .payments import remaining_or_default
except ImportError:
    from models import LedgerTransaction, ObligationTransaction
    from payments import remaining_or_default

OVERDUE = 'overdue'
DUE_TODAY = 'due_today'
UPCOMING = 'upcoming'

DEFAULT_WINDOW = 5


@dataclass(frozen=True)
class UpcomingObligation:
    transaction: ObligationTransaction
    due_date: date
    status: str

    @property
    def remaining_value(self) -> float:
        return self.transaction.value * remaining_or_default(self.transaction) / 100


def parse_date(value) -> Optional[date]:
    """Parse an ISO-ish date; anything unparsable returns ``None``."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    ts = pd.to_datetime(value, errors='coerce')
    if pd.isna(ts):
        return None
    return ts.date()


def classify_due_status(due_date: date, today: Optional[date] = None) -> str:
    """Compare calendar days only; the time of day never matters."""
    today = today or date.today()
    if due_date < today:
        return OVERDUE
    if due_date == today:
        return DUE_TODAY
    return UPCOMING


def compute_upcoming(
    transactions: Iterable[LedgerTransaction],
    limit: Optional[int] = DEFAULT_WINDOW,
    today: Optional[date] = None,
) -> List[UpcomingObligation]:
    """Outstanding EXPENSE/DEBT items with a due date, soonest first.

    Paid-off items (remaining 0) and items whose due date is missing or
    unparsable are left out. ``limit=None`` returns the full list.
    """
    today = today or date.today()
    pending = []
    for txn in transactions:
        if not txn.is_obligation or remaining_or_default(txn) <= 0:
            continue
        due = parse_date(txn.due_date)
        if due is None:
            continue
        pending.append((due, txn))

    pending.sort(key=lambda item: item[0])
    if limit is not None:
        pending = pending[:max(limit, 0)]
    return [
        UpcomingObligation(transaction=txn, due_date=due, status=classify_due_status(due, today))
        for due, txn in pending
    ]


def compute_recent(
    transactions: Iterable[LedgerTransaction],
    limit: Optional[int] = DEFAULT_WINDOW,
) -> List[LedgerTransaction]:
    """Most recent transactions of any type by ``date``; unparsable dates go last."""
    dated = [(parse_date(txn.date), txn) for txn in transactions]
    known = sorted((item for item in dated if item[0] is not None), key=lambda item: item[0], reverse=True)
    unknown = [item for item in dated if item[0] is None]
    ordered = [txn for _, txn in known + unknown]
    if limit is None:
        return ordered
    return ordered[:max(limit, 0)]
