"""Supabase-backed ledger store.

Tables ``profiles``, ``transactions`` and ``goals`` use snake_case columns
matching :meth:`to_record` of each entity, plus a server-side ``created_at``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from supabase import Client, create_client

from ..models import (
    Goal, LedgerTransaction, Profile,
    goal_from_record, profile_from_record, transaction_from_record,
)
from .base import LedgerStore, StorageError, ensure_id, parse_rows

logger = logging.getLogger(__name__)


def get_supabase_client(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """Return a Supabase client for the configured project."""
    from ..config import SUPABASE_KEY, SUPABASE_URL

    url = url or SUPABASE_URL
    key = key or SUPABASE_KEY
    if not url or not key:
        raise StorageError('connect', "SUPABASE_URL and SUPABASE_KEY must be set")
    return create_client(url, key)


class SupabaseStore(LedgerStore):
    """Ledger tables hosted on Supabase (PostgREST)."""

    def __init__(self, client: Optional[Client] = None) -> None:
        self.client = client or get_supabase_client()

    def _run(self, operation: str, build: Callable[[], Any]) -> List[Dict[str, Any]]:
        try:
            response = build().execute()
        except Exception as exc:
            logger.exception("Supabase %s failed", operation)
            raise StorageError(operation, str(exc)) from exc
        return response.data or []

    def _insert(self, operation: str, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        rows = self._run(operation, lambda: self.client.table(table).insert(record))
        return rows[0] if rows else record

    def _delete(self, operation: str, table: str, row_id: str) -> None:
        self._run(operation, lambda: self.client.table(table).delete().eq('id', row_id))

    def _update(self, operation: str, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        row_id = record.pop('id')
        rows = self._run(operation, lambda: self.client.table(table).update(record).eq('id', row_id))
        if not rows:
            raise StorageError(operation, f"{table} row {row_id} not found")
        return rows[0]

    # Profiles ---------------------------------------------------------------

    def list_profiles(self) -> List[Profile]:
        rows = self._run(
            'list_profiles',
            lambda: self.client.table('profiles').select('*').order('created_at'),
        )
        return parse_rows('list_profiles', rows, profile_from_record)

    def create_profile(self, profile: Profile) -> Profile:
        row = self._insert('create_profile', 'profiles', ensure_id(profile).to_record())
        return profile_from_record(row)

    def delete_profile(self, profile_id: str) -> None:
        self._delete('delete_profile', 'profiles', profile_id)

    # Transactions -----------------------------------------------------------

    def list_transactions(self) -> List[LedgerTransaction]:
        rows = self._run(
            'list_transactions',
            lambda: self.client.table('transactions').select('*').order('date', desc=True),
        )
        return parse_rows('list_transactions', rows, transaction_from_record)

    def create_transaction(self, transaction: LedgerTransaction) -> LedgerTransaction:
        row = self._insert('create_transaction', 'transactions', ensure_id(transaction).to_record())
        return transaction_from_record(row)

    def update_transaction(self, transaction: LedgerTransaction) -> LedgerTransaction:
        return transaction_from_record(
            self._update('update_transaction', 'transactions', transaction.to_record(drop_none=False))
        )

    def delete_transaction(self, transaction_id: str) -> None:
        self._delete('delete_transaction', 'transactions', transaction_id)

    # Goals ------------------------------------------------------------------

    def list_goals(self) -> List[Goal]:
        rows = self._run(
            'list_goals',
            lambda: self.client.table('goals').select('*').order('deadline'),
        )
        return parse_rows('list_goals', rows, goal_from_record)

    def create_goal(self, goal: Goal) -> Goal:
        row = self._insert('create_goal', 'goals', ensure_id(goal).to_record())
        return goal_from_record(row)

    def update_goal(self, goal: Goal) -> Goal:
        return goal_from_record(self._update('update_goal', 'goals', goal.to_record(drop_none=False)))

    def delete_goal(self, goal_id: str) -> None:
        self._delete('delete_goal', 'goals', goal_id)
