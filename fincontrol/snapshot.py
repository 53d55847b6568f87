"""Loading a consistent snapshot of the ledger for the views.

The views only compute against a snapshot once profiles, transactions and
goals have all loaded. A failed refresh keeps the previous snapshot so good
data on screen is never replaced by an error state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

try:
    from .models import Goal, LedgerTransaction, LedgerValidationError, Profile
    from .storage import LedgerStore, StorageError
except ImportError:
    from models import Goal, LedgerTransaction, LedgerValidationError, Profile
    from storage import LedgerStore, StorageError

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = 'Erro ao carregar dados. Verifique sua conexão.'


@dataclass(frozen=True)
class LedgerSnapshot:
    profiles: List[Profile] = field(default_factory=list)
    transactions: List[LedgerTransaction] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    loaded_at: Optional[datetime] = None

    @property
    def is_loaded(self) -> bool:
        return self.loaded_at is not None


EMPTY_SNAPSHOT = LedgerSnapshot()


def load_snapshot(store: LedgerStore) -> LedgerSnapshot:
    """Read all three collections; raises :class:`StorageError` on failure."""
    profiles = store.list_profiles()
    transactions = store.list_transactions()
    goals = store.list_goals()
    return LedgerSnapshot(
        profiles=profiles,
        transactions=transactions,
        goals=goals,
        loaded_at=datetime.now(),
    )


def refresh_snapshot(
    store: LedgerStore,
    previous: Optional[LedgerSnapshot] = None,
) -> Tuple[LedgerSnapshot, Optional[str]]:
    """Reload from ``store``; on failure return ``previous`` and a user message."""
    try:
        return load_snapshot(store), None
    except (StorageError, LedgerValidationError):
        logger.warning("Ledger refresh failed; keeping previous snapshot", exc_info=True)
        return (previous or EMPTY_SNAPSHOT), LOAD_ERROR_MESSAGE
