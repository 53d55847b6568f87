"""Persistence for profiles, transactions and goals.

Two interchangeable backends implement :class:`LedgerStore`:

* :class:`SQLiteStore` - a local SQLite file (default)
* ``SupabaseStore`` - tables on a Supabase project

``get_store()`` returns the backend selected by ``FINCONTROL_STORAGE``.
"""

from __future__ import annotations

from typing import Optional

from .base import LedgerStore, StorageError, new_id
from .migration import demo_records, factory_reset, migrate_legacy_store, seed_demo_data
from .sqlite_store import SQLiteStore

_store: Optional[LedgerStore] = None


def get_store() -> LedgerStore:
    global _store
    if _store is None:
        from ..config import STORAGE_BACKEND

        if STORAGE_BACKEND == 'supabase':
            # Imported lazily so the SQLite path never needs the Supabase client.
            from .supabase_store import SupabaseStore
            _store = SupabaseStore()
        elif STORAGE_BACKEND == 'sqlite':
            _store = SQLiteStore()
        else:
            raise StorageError('get_store', f"unknown storage backend {STORAGE_BACKEND!r}")
    return _store


__all__ = [
    'LedgerStore',
    'StorageError',
    'SQLiteStore',
    'get_store',
    'new_id',
    'demo_records',
    'factory_reset',
    'migrate_legacy_store',
    'seed_demo_data',
]
