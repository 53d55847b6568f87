from datetime import date

import pytest

from fincontrol.models import (
    Frequency,
    IncomeTransaction,
    ObligationTransaction,
    Priority,
    Profile,
    ProfileType,
    TransactionType,
)


def make_income(txn_id='i1', value=1000.0, txn_date='2024-01-10', profile_id='p1', **extra):
    return IncomeTransaction(
        id=txn_id, profile_id=profile_id, name=f"Renda {txn_id}", value=value, date=txn_date, **extra
    )


def make_obligation(txn_id='e1', value=100.0, txn_date='2024-01-10', profile_id='p1',
                    kind=TransactionType.EXPENSE, **extra):
    return ObligationTransaction(
        id=txn_id, profile_id=profile_id, name=f"Conta {txn_id}", value=value, date=txn_date,
        kind=kind, **extra
    )


@pytest.fixture
def profiles():
    return [
        Profile(id='p1', name='João', type=ProfileType.PERSONAL, bank_account='Nubank'),
        Profile(id='p2', name='Loja', type=ProfileType.BUSINESS, bank_account='Inter PJ'),
    ]


@pytest.fixture
def ledger():
    return [
        make_income('i1', 5000, '2024-01-05', is_fixed_income=True),
        make_income('i2', 800, '2024-02-03', profile_id='p2'),
        make_obligation('e1', 1200, '2024-01-20', priority=Priority.HIGH, category='Moradia',
                        frequency=Frequency.FIXED, due_date='2024-02-10', remaining_percentage=100),
        make_obligation('e2', 300, '2024-02-15', priority=Priority.LOW, category='Alimentação',
                        remaining_percentage=0),
        make_obligation('d1', 3000, '2024-02-01', kind=TransactionType.DEBT, priority=Priority.CRITICAL,
                        category='Transporte', due_date='2024-03-01', remaining_percentage=80,
                        number_of_installments=10),
    ]


@pytest.fixture
def today():
    return date(2024, 2, 20)


@pytest.fixture
def income():
    return make_income


@pytest.fixture
def obligation():
    return make_obligation
