from fincontrol.formatting import (
    MISSING_PROFILE_LABEL,
    PRIORITY_LABELS,
    due_status_label,
    format_currency,
    format_date,
    payment_status_label,
    profile_name,
)
from fincontrol.models import Priority
from fincontrol.schedule import DUE_TODAY, OVERDUE, UPCOMING


def test_format_currency():
    assert format_currency(1234.5) == 'R$ 1.234,50'
    assert format_currency(1234567.891) == 'R$ 1.234.567,89'
    assert format_currency(0) == 'R$ 0,00'
    assert format_currency(-50) == 'R$ -50,00'
    assert format_currency(99.9, include_sign=False) == '99,90'


def test_format_date():
    assert format_date('2024-03-05') == '05/03/2024'
    assert format_date('2024-03-05', compact=True) == '05/03/24'
    assert format_date(None) == '-'
    assert format_date('lixo') == '-'


def test_profile_name_falls_back_for_dangling_ids(profiles):
    assert profile_name(profiles, 'p2') == 'Loja'
    assert profile_name(profiles, 'removed') == MISSING_PROFILE_LABEL
    assert profile_name(profiles, None) == 'N/A'


def test_due_status_labels():
    assert due_status_label(OVERDUE) == 'Atrasado'
    assert due_status_label(DUE_TODAY) == 'Vence Hoje'
    assert due_status_label(UPCOMING) == 'No prazo'


def test_payment_status_label():
    assert payment_status_label(0) == 'Quitado'
    assert payment_status_label(25) == '75% Pago'
    assert payment_status_label(100) == '0% Pago'


def test_priority_labels():
    assert PRIORITY_LABELS[Priority.CRITICAL] == 'Crítica'
    assert len(PRIORITY_LABELS) == len(Priority)
