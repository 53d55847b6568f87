"""Installment and payment-progress calculations for a single obligation."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

try:
    from .models import ObligationTransaction
except ImportError:
    from models import ObligationTransaction

FULLY_OUTSTANDING = 100.0


@dataclass(frozen=True)
class PaymentProgress:
    remaining_percentage: float
    remaining_value: float
    amount_paid: float
    installment_label: Optional[str]
    paid_installments: Optional[int]
    total_installments: Optional[int]

    @property
    def paid_percentage(self) -> float:
        return FULLY_OUTSTANDING - self.remaining_percentage

    @property
    def is_fully_paid(self) -> bool:
        return self.remaining_percentage == 0


def round_half_up(number: float) -> int:
    """Round to the nearest integer with .5 going up (unlike ``round``)."""
    return int(math.floor(number + 0.5))


def remaining_or_default(transaction: ObligationTransaction) -> float:
    remaining = transaction.remaining_percentage
    return FULLY_OUTSTANDING if remaining is None else float(remaining)


def _total_installments(transaction: ObligationTransaction) -> Optional[int]:
    if transaction.number_of_installments:
        return int(transaction.number_of_installments)
    installment_value = transaction.installment_value
    if not installment_value or transaction.value <= 0:
        return None
    try:
        quotient = transaction.value / installment_value
    except ZeroDivisionError:
        return None
    if not math.isfinite(quotient):
        return None
    total = round_half_up(quotient)
    return total if total > 0 else None


def compute_payment_progress(transaction: ObligationTransaction) -> PaymentProgress:
    """Return the progress view of an EXPENSE/DEBT transaction.

    ``remaining_percentage`` drives the progress numbers; an explicit
    ``amount_paid`` wins over the derived one for the "paid so far" figure.
    Installments come from ``number_of_installments`` or, failing that, from
    ``value / installment_value``. Anything not computable yields no label.
    """
    remaining = remaining_or_default(transaction)
    remaining_value = transaction.value * remaining / 100
    if transaction.amount_paid is not None:
        amount_paid = float(transaction.amount_paid)
    else:
        amount_paid = transaction.value - remaining_value

    total = _total_installments(transaction)
    paid = None
    label = None
    if total is not None:
        paid = round_half_up(total * (FULLY_OUTSTANDING - remaining) / 100)
        label = f"{paid}/{total}"

    return PaymentProgress(
        remaining_percentage=remaining,
        remaining_value=remaining_value,
        amount_paid=amount_paid,
        installment_label=label,
        paid_installments=paid,
        total_installments=total,
    )


# ---------------------------------------------------------------------------
# Write-time helpers used by the transaction form and the payment update flow
# ---------------------------------------------------------------------------


def remaining_from_amount_paid(value: float, amount_paid: float) -> float:
    """Whole-number percentage still outstanding after paying ``amount_paid``."""
    if value is None or value <= 0 or amount_paid is None:
        return FULLY_OUTSTANDING
    outstanding = max(0.0, value - amount_paid)
    pct = outstanding / value * 100
    return float(round_half_up(max(0.0, min(FULLY_OUTSTANDING, pct))))


def amount_paid_from_remaining(value: float, remaining_percentage: float) -> float:
    if value is None or remaining_percentage is None:
        return 0.0
    return round(value - value * remaining_percentage / 100, 2)


def suggest_installment_value(value: float, number_of_installments: Optional[int]) -> Optional[float]:
    if not number_of_installments or number_of_installments <= 0 or value is None:
        return None
    return round(value / number_of_installments, 2)


def apply_payment_update(
    transaction: ObligationTransaction,
    *,
    amount_paid: Optional[float] = None,
    remaining_percentage: Optional[float] = None,
) -> ObligationTransaction:
    """Rewrite both payment representations together.

    When ``amount_paid`` is given the percentage is derived from it; when only
    ``remaining_percentage`` is given the paid amount is derived instead.
    """
    if amount_paid is not None:
        remaining = remaining_from_amount_paid(transaction.value, amount_paid)
        return replace(transaction, amount_paid=float(amount_paid), remaining_percentage=remaining)
    if remaining_percentage is not None:
        paid = amount_paid_from_remaining(transaction.value, remaining_percentage)
        return replace(transaction, amount_paid=paid, remaining_percentage=float(remaining_percentage))
    return transaction
