"""Savings goal progress and the ad-hoc "how long until I get there" simulator."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

import pandas as pd

try:
    from .models import Goal
    from .schedule import parse_date
except ImportError:
    from models import Goal
    from schedule import parse_date

STATUS_DONE = 'Concluída'
STATUS_IN_PROGRESS = 'Em andamento'


@dataclass(frozen=True)
class GoalProjection:
    months_to_goal: int
    years_to_goal: float
    progress_percentage: float
    is_computable: bool = True

    @property
    def show_years(self) -> bool:
        return self.months_to_goal > 12


def _percentage(current: float, target: float) -> float:
    if target is None or target <= 0:
        return 100.0
    pct = current / target * 100
    if not math.isfinite(pct):
        return 100.0
    return max(0.0, min(pct, 100.0))


def compute_goal_projection(
    target_amount: float,
    current_saved: float,
    monthly_contribution: float,
) -> GoalProjection:
    """Months of saving needed to reach ``target_amount``.

    A non-positive or non-finite contribution cannot reach anything; the
    result then reports zero months and ``is_computable=False``.
    """
    progress = _percentage(current_saved, target_amount)
    if (
        monthly_contribution is None
        or not math.isfinite(monthly_contribution)
        or monthly_contribution <= 0
    ):
        return GoalProjection(0, 0.0, progress, is_computable=False)

    shortfall = target_amount - current_saved
    months = max(0, math.ceil(shortfall / monthly_contribution))
    return GoalProjection(
        months_to_goal=months,
        years_to_goal=round(months / 12, 1),
        progress_percentage=progress,
    )


def compute_goal_percentage(goal: Goal) -> float:
    """Funded share of a stored goal, clamped to [0, 100]."""
    return _percentage(goal.current_amount, goal.target_amount)


def compute_goal_progress(goals: Iterable[Goal], today: Optional[date] = None) -> pd.DataFrame:
    """One row per goal for the goals list view."""
    today = today or date.today()
    rows = []
    for goal in goals:
        percentage = compute_goal_percentage(goal)
        deadline = parse_date(goal.deadline)
        rows.append({
            'id': goal.id,
            'name': goal.name,
            'target_amount': goal.target_amount,
            'current_amount': goal.current_amount,
            'remaining_amount': max(0.0, goal.target_amount - goal.current_amount),
            'percentage': percentage,
            'deadline': deadline,
            'days_left': (deadline - today).days if deadline else None,
            'status': STATUS_DONE if percentage >= 100 else STATUS_IN_PROGRESS,
        })
    return pd.DataFrame(rows, columns=[
        'id', 'name', 'target_amount', 'current_amount', 'remaining_amount',
        'percentage', 'deadline', 'days_left', 'status',
    ])
