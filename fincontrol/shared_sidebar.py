"""Shared sidebar components for the multipage dashboard.

Every page calls :func:`render_shared_sidebar` first; it owns the store,
the one-time legacy migration and the ledger snapshot kept in
``st.session_state``.
"""

from __future__ import annotations

import logging
from typing import Dict

import streamlit as st

try:
    from . import config
    from .snapshot import EMPTY_SNAPSHOT, LedgerSnapshot, refresh_snapshot
    from .storage import LedgerStore, StorageError, get_store, migrate_legacy_store, seed_demo_data
    from .ui import FinControlUI
except ImportError:
    import config
    from snapshot import EMPTY_SNAPSHOT, LedgerSnapshot, refresh_snapshot
    from storage import LedgerStore, StorageError, get_store, migrate_legacy_store, seed_demo_data
    from ui import FinControlUI

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = 'ledger_snapshot'
ERROR_KEY = 'ledger_error'
MIGRATED_KEY = 'legacy_migrated'


def _run_migration_once(store: LedgerStore) -> None:
    if st.session_state.get(MIGRATED_KEY):
        return
    st.session_state[MIGRATED_KEY] = True
    try:
        counts = migrate_legacy_store(store)
    except StorageError:
        # Non-critical: the app keeps working with whatever the store holds.
        logger.warning("Legacy migration failed", exc_info=True)
        st.sidebar.warning("Não foi possível migrar os dados locais antigos.")
        return
    if counts['profiles'] or counts['transactions'] or counts['goals']:
        st.sidebar.success(
            f"Migrados {counts['profiles']} perfis, {counts['transactions']} lançamentos "
            f"e {counts['goals']} metas."
        )


def reload_snapshot(store: LedgerStore) -> LedgerSnapshot:
    """Refresh the session snapshot after a write; keeps the old one on failure."""
    previous = st.session_state.get(SNAPSHOT_KEY, EMPTY_SNAPSHOT)
    snapshot, error = refresh_snapshot(store, previous)
    st.session_state[SNAPSHOT_KEY] = snapshot
    st.session_state[ERROR_KEY] = error
    return snapshot


def render_shared_sidebar() -> Dict:
    """Render shared sidebar elements available on all pages.

    Returns:
        Dict with keys: 'store', 'snapshot', 'error', 'ui'
    """
    ui = FinControlUI()
    st.sidebar.title("💰 FinControl")

    try:
        store = get_store()
    except StorageError as exc:
        st.sidebar.error(f"Armazenamento indisponível: {exc}")
        return {'store': None, 'snapshot': EMPTY_SNAPSHOT, 'error': str(exc), 'ui': ui}

    _run_migration_once(store)

    if SNAPSHOT_KEY not in st.session_state:
        reload_snapshot(store)

    st.sidebar.subheader("🗄️ Dados")
    if st.sidebar.button("🔄 Atualizar dados"):
        reload_snapshot(store)

    snapshot: LedgerSnapshot = st.session_state[SNAPSHOT_KEY]
    if snapshot.is_loaded and not snapshot.profiles:
        st.sidebar.caption("Nenhum perfil cadastrado ainda.")
        if st.sidebar.button("✨ Carregar dados de exemplo"):
            try:
                seed_demo_data(store)
            except StorageError:
                st.sidebar.error("Falha ao carregar os dados de exemplo.")
            reload_snapshot(store)
            st.rerun()

    error = st.session_state.get(ERROR_KEY)
    if error:
        st.error(error)
        if st.button("Tentar novamente", key="retry_load"):
            reload_snapshot(store)
            st.rerun()

    st.sidebar.caption(f"Backend: {config.STORAGE_BACKEND}")
    return {
        'store': store,
        'snapshot': st.session_state[SNAPSHOT_KEY],
        'error': error,
        'ui': ui,
    }
