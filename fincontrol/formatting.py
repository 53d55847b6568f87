"""Formatting utilities for currency, dates and pt-BR labels."""

from __future__ import annotations

from typing import Iterable, Optional, Union

try:
    from .models import Frequency, Priority, Profile, ProfileType, TransactionType
    from .schedule import DUE_TODAY, OVERDUE, parse_date
except ImportError:
    from models import Frequency, Priority, Profile, ProfileType, TransactionType
    from schedule import DUE_TODAY, OVERDUE, parse_date

MISSING_PROFILE_LABEL = 'N/A'

TYPE_LABELS = {
    TransactionType.INCOME: 'RENDA',
    TransactionType.EXPENSE: 'DESPESA',
    TransactionType.DEBT: 'DÍVIDA',
}
PRIORITY_LABELS = {
    Priority.CRITICAL: 'Crítica',
    Priority.HIGH: 'Alta',
    Priority.MEDIUM: 'Média',
    Priority.LOW: 'Baixa',
}
PRIORITY_COLORS = {
    Priority.CRITICAL: '#ef4444',
    Priority.HIGH: '#f97316',
    Priority.MEDIUM: '#6366f1',
    Priority.LOW: '#10b981',
}
FREQUENCY_LABELS = {
    Frequency.FIXED: 'Fixa',
    Frequency.VARIABLE: 'Variável',
    Frequency.TEMPORARY: 'Temporária',
}
PROFILE_TYPE_LABELS = {
    ProfileType.PERSONAL: 'Pessoa Física',
    ProfileType.BUSINESS: 'Pessoa Jurídica',
}
DUE_STATUS_LABELS = {
    OVERDUE: 'Atrasado',
    DUE_TODAY: 'Vence Hoje',
}
DEFAULT_DUE_STATUS_LABEL = 'No prazo'


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format an amount the Brazilian way.

    Example:
        >>> format_currency(1234.5)
        'R$ 1.234,50'
        >>> format_currency(1234.5, include_sign=False)
        '1.234,50'
    """
    formatted = f"{amount:,.2f}".replace(',', '_').replace('.', ',').replace('_', '.')
    return f"R$ {formatted}" if include_sign else formatted


def format_date(value, compact: bool = False) -> str:
    """``dd/mm/yyyy`` (or ``dd/mm/yy`` when compact); ``-`` when missing."""
    parsed = parse_date(value)
    if parsed is None:
        return '-'
    return parsed.strftime('%d/%m/%y' if compact else '%d/%m/%Y')


def profile_name(profiles: Iterable[Profile], profile_id: Optional[str]) -> str:
    """Name of the referenced profile, or a placeholder for dangling ids."""
    for profile in profiles:
        if profile.id == profile_id:
            return profile.name
    return MISSING_PROFILE_LABEL


def due_status_label(status: str) -> str:
    return DUE_STATUS_LABELS.get(status, DEFAULT_DUE_STATUS_LABEL)


def payment_status_label(remaining_percentage: float) -> str:
    if remaining_percentage == 0:
        return 'Quitado'
    return f"{100 - remaining_percentage:.0f}% Pago"
