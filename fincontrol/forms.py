"""Turning raw form input into validated ledger entities.

The Streamlit pages collect widget values into plain dicts and hand them
here; everything that can be checked without a UI lives in this module.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

try:
    from .models import (
        Goal, LedgerTransaction, LedgerValidationError, Profile, TransactionType,
        transaction_from_record,
    )
    from .payments import apply_payment_update, suggest_installment_value
except ImportError:
    from models import (
        Goal, LedgerTransaction, LedgerValidationError, Profile, TransactionType,
        transaction_from_record,
    )
    from payments import apply_payment_update, suggest_installment_value


def _iso(value: Any) -> Optional[str]:
    if isinstance(value, date):
        return value.isoformat()
    return value or None


def build_profile(values: Dict[str, Any]) -> Profile:
    return Profile(
        id='',
        name=(values.get('name') or '').strip(),
        type=values.get('type'),
        bank_account=(values.get('bank_account') or '').strip(),
    )


def build_transaction(values: Dict[str, Any]) -> LedgerTransaction:
    """Validate a submitted transaction form.

    For EXPENSE/DEBT the installment value defaults to ``value / count`` and
    the two payment representations are made consistent: a typed paid
    amount sets the remaining percentage, otherwise the percentage sets the
    paid amount.
    """
    if not values.get('profile_id'):
        raise LedgerValidationError("Por favor, selecione um perfil.")
    value = values.get('value')
    if value is None or float(value) <= 0:
        raise LedgerValidationError("Informe um valor maior que zero.")

    record: Dict[str, Any] = {
        'id': '',
        'profile_id': values['profile_id'],
        'type': values.get('type'),
        'name': (values.get('name') or '').strip(),
        'value': float(value),
        'date': _iso(values.get('date')) or date.today().isoformat(),
        'category': values.get('category'),
        'notes': values.get('notes'),
    }
    if not record['name']:
        raise LedgerValidationError("Informe uma descrição para o lançamento.")

    if str(record['type'] or '').upper() == TransactionType.INCOME.value:
        record['is_fixed_income'] = bool(values.get('is_fixed_income'))
        return transaction_from_record(record)

    installments = values.get('number_of_installments') or None
    installment_value = values.get('installment_value') or None
    if installments and not installment_value:
        installment_value = suggest_installment_value(record['value'], int(installments))
    record.update({
        'frequency': values.get('frequency'),
        'priority': values.get('priority'),
        'due_date': _iso(values.get('due_date')),
        'remaining_percentage': values.get('remaining_percentage', 100),
        'number_of_installments': installments,
        'installment_value': installment_value,
    })
    transaction = transaction_from_record(record)

    amount_paid = values.get('amount_paid')
    if amount_paid:
        return apply_payment_update(transaction, amount_paid=float(amount_paid))
    return apply_payment_update(transaction, remaining_percentage=transaction.remaining_percentage)


def build_goal(values: Dict[str, Any]) -> Goal:
    return Goal(
        id='',
        name=(values.get('name') or '').strip(),
        target_amount=values.get('target_amount'),
        current_amount=values.get('current_amount') or 0.0,
        deadline=_iso(values.get('deadline')),
    )


def clean_simulator_inputs(target_amount: float, current_saved: float, monthly_contribution: float):
    """Clamp simulator fields to non-negative numbers before projecting."""
    return (
        max(0.0, float(target_amount or 0.0)),
        max(0.0, float(current_saved or 0.0)),
        max(0.0, float(monthly_contribution or 0.0)),
    )
