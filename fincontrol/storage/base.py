"""Store interface shared by the SQLite and Supabase backends."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Dict, Iterable, List, TypeVar

from ..models import Goal, LedgerTransaction, LedgerValidationError, Profile, with_id

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """A read or write against the backing store failed; safe to retry."""

    def __init__(self, operation: str, message: str = '') -> None:
        self.operation = operation
        super().__init__(f"{operation} failed" + (f": {message}" if message else ''))


def new_id() -> str:
    return str(uuid.uuid4())


def ensure_id(entity):
    """Give ``entity`` a fresh id when it has none."""
    return entity if entity.id else with_id(entity, new_id())


T = TypeVar('T')


def parse_rows(operation: str, rows: Iterable[Dict[str, Any]], parse: Callable[[Dict[str, Any]], T]) -> List[T]:
    """Convert stored rows, skipping those that fail validation."""
    items = []
    for row in rows:
        try:
            items.append(parse(row))
        except LedgerValidationError as exc:
            logger.warning("%s: skipping invalid row %r: %s", operation, row.get('id'), exc)
    return items


class LedgerStore:
    """Create/list/delete access to profiles, transactions and goals.

    Backends raise :class:`StorageError` for any failure. Listing order:
    profiles by creation, transactions newest ``date`` first, goals by
    deadline.
    """

    # Profiles ---------------------------------------------------------------

    def list_profiles(self) -> List[Profile]:
        raise NotImplementedError

    def create_profile(self, profile: Profile) -> Profile:
        raise NotImplementedError

    def delete_profile(self, profile_id: str) -> None:
        raise NotImplementedError

    # Transactions -----------------------------------------------------------

    def list_transactions(self) -> List[LedgerTransaction]:
        raise NotImplementedError

    def create_transaction(self, transaction: LedgerTransaction) -> LedgerTransaction:
        raise NotImplementedError

    def update_transaction(self, transaction: LedgerTransaction) -> LedgerTransaction:
        raise NotImplementedError

    def delete_transaction(self, transaction_id: str) -> None:
        raise NotImplementedError

    # Goals ------------------------------------------------------------------

    def list_goals(self) -> List[Goal]:
        raise NotImplementedError

    def create_goal(self, goal: Goal) -> Goal:
        raise NotImplementedError

    def update_goal(self, goal: Goal) -> Goal:
        raise NotImplementedError

    def delete_goal(self, goal_id: str) -> None:
        raise NotImplementedError

    # Bulk -------------------------------------------------------------------

    def has_profiles(self) -> bool:
        return bool(self.list_profiles())

    def clear_all(self) -> None:
        """Delete every profile, transaction and goal."""
        for txn in self.list_transactions():
            self.delete_transaction(txn.id)
        for goal in self.list_goals():
            self.delete_goal(goal.id)
        for profile in self.list_profiles():
            self.delete_profile(profile.id)
        logger.info("Cleared all ledger data")
