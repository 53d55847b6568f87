"""One-off data movement: legacy import, demo seed and factory reset."""

from __future__ import annotations

import json
import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models import (
    LedgerValidationError, Profile, ProfileType,
    goal_from_record, profile_from_record, transaction_from_record,
)
from .base import LedgerStore, StorageError

logger = logging.getLogger(__name__)

LEGACY_KEYS = {
    'profiles': 'fincontrol_profiles',
    'transactions': 'fincontrol_transactions',
    'goals': 'fincontrol_goals',
}
DEFAULT_PROFILE = Profile(id='', name='Meu Perfil', type=ProfileType.PERSONAL, bank_account='Carteira')


def _load_legacy_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        raise StorageError('migrate_legacy_store', f"cannot read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise StorageError('migrate_legacy_store', f"{path} does not contain a JSON object")
    return data


def _legacy_records(data: Dict[str, Any], entity: str) -> List[Dict[str, Any]]:
    records = data.get(LEGACY_KEYS[entity]) or []
    # The browser store kept each key as a JSON-encoded string.
    if isinstance(records, str):
        try:
            records = json.loads(records)
        except json.JSONDecodeError:
            logger.warning("Legacy %s entry is not valid JSON; skipping", entity)
            return []
    if not isinstance(records, list):
        return []
    return [record for record in records if isinstance(record, dict)]


def migrate_legacy_store(store: LedgerStore, legacy_path: Optional[Path] = None) -> Dict[str, int]:
    """Copy a legacy local export into ``store``, keeping the original ids.

    Skipped entirely when the file is missing or the store already holds
    profiles. Records that fail validation are skipped and counted.
    """
    if legacy_path is None:
        from ..config import LEGACY_STORE_PATH
        legacy_path = LEGACY_STORE_PATH
    legacy_path = Path(legacy_path)
    counts = {'profiles': 0, 'transactions': 0, 'goals': 0, 'skipped': 0}

    if not legacy_path.exists():
        logger.info("No legacy store at %s; nothing to migrate", legacy_path)
        return counts
    if store.has_profiles():
        logger.info("Migration already completed, skipping")
        return counts

    data = _load_legacy_file(legacy_path)
    steps = [
        ('profiles', profile_from_record, store.create_profile),
        ('transactions', transaction_from_record, store.create_transaction),
        ('goals', goal_from_record, store.create_goal),
    ]
    for entity, parse, create in steps:
        for record in _legacy_records(data, entity):
            try:
                item = parse(record)
            except LedgerValidationError as exc:
                logger.warning("Skipping legacy %s record %r: %s", entity, record.get('id'), exc)
                counts['skipped'] += 1
                continue
            create(item)
            counts[entity] += 1
        logger.info("Migrated %d %s", counts[entity], entity)

    logger.info("Migration completed successfully")
    return counts


def factory_reset(store: LedgerStore) -> Profile:
    """Wipe every collection and start over with a single default profile."""
    store.clear_all()
    return store.create_profile(DEFAULT_PROFILE)


def demo_records(today: Optional[date] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Sample profiles and transactions dated relative to ``today``."""
    today = today or date.today()

    def day(offset: int) -> str:
        return (today + timedelta(days=offset)).isoformat()

    profiles = [
        {'id': 'demo-personal', 'name': 'João Silva', 'type': 'PERSONAL', 'bankAccount': 'Nubank'},
        {'id': 'demo-business', 'name': 'JS Soluções LTDA', 'type': 'BUSINESS', 'bankAccount': 'Inter PJ'},
    ]
    transactions = [
        {'id': 'demo-t1', 'profileId': 'demo-personal', 'type': 'INCOME', 'name': 'Salário Mensal',
         'value': 5000, 'date': day(0), 'category': 'Salário', 'isFixedIncome': True,
         'notes': 'Salário referente ao mês atual'},
        {'id': 'demo-t2', 'profileId': 'demo-business', 'type': 'INCOME', 'name': 'Projeto Consultoria TI',
         'value': 8500, 'date': day(-5), 'category': 'Vendas', 'isFixedIncome': False,
         'notes': 'Cliente ABC Corp'},
        {'id': 'demo-t3', 'profileId': 'demo-personal', 'type': 'INCOME', 'name': 'Dividendos FIIs',
         'value': 120.50, 'date': day(-10), 'category': 'Investimentos', 'isFixedIncome': False,
         'notes': 'MXRF11'},
        {'id': 'demo-t4', 'profileId': 'demo-business', 'type': 'EXPENSE', 'name': 'Aluguel Escritório',
         'value': 2000, 'date': day(0), 'dueDate': day(5), 'category': 'Moradia', 'frequency': 'FIXED',
         'priority': 'HIGH', 'remainingPercentage': 100, 'amountPaid': 0, 'notes': 'Vencimento dia 10'},
        {'id': 'demo-t5', 'profileId': 'demo-personal', 'type': 'EXPENSE', 'name': 'Supermercado Semanal',
         'value': 450.75, 'date': day(-2), 'category': 'Alimentação', 'frequency': 'VARIABLE',
         'priority': 'MEDIUM', 'remainingPercentage': 0, 'amountPaid': 450.75, 'notes': 'Compra do mês'},
        {'id': 'demo-t6', 'profileId': 'demo-business', 'type': 'EXPENSE', 'name': 'Licença Software CRM',
         'value': 299.90, 'date': day(0), 'category': 'Software', 'frequency': 'FIXED',
         'priority': 'CRITICAL', 'remainingPercentage': 100, 'amountPaid': 0},
        {'id': 'demo-t7', 'profileId': 'demo-personal', 'type': 'DEBT', 'name': 'Empréstimo Carro',
         'value': 15000, 'date': day(-60), 'category': 'Transporte', 'priority': 'HIGH', 'frequency': 'FIXED',
         'numberOfInstallments': 36, 'installmentValue': 416.66, 'remainingPercentage': 80,
         'amountPaid': 3000, 'dueDate': day(15)},
        {'id': 'demo-t8', 'profileId': 'demo-business', 'type': 'DEBT', 'name': 'Notebook Novo (Parcelado)',
         'value': 4500, 'date': day(-30), 'category': 'Equipamentos', 'priority': 'MEDIUM',
         'frequency': 'TEMPORARY', 'numberOfInstallments': 10, 'installmentValue': 450,
         'remainingPercentage': 90, 'amountPaid': 450, 'dueDate': day(20)},
    ]
    return {'profiles': profiles, 'transactions': transactions}


def seed_demo_data(store: LedgerStore, today: Optional[date] = None) -> Dict[str, int]:
    """Load the demo profiles and transactions into ``store``."""
    records = demo_records(today)
    for record in records['profiles']:
        store.create_profile(profile_from_record(record))
    for record in records['transactions']:
        store.create_transaction(transaction_from_record(record))
    logger.info(
        "Seeded %d demo profiles and %d demo transactions",
        len(records['profiles']), len(records['transactions']),
    )
    return {'profiles': len(records['profiles']), 'transactions': len(records['transactions'])}
