"""SQLite-backed ledger store (the default, local backend)."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from ..models import (
    Goal, LedgerTransaction, Profile,
    goal_from_record, profile_from_record, transaction_from_record,
)
from .base import LedgerStore, StorageError, ensure_id, parse_rows

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS profiles (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    type TEXT NOT NULL,
    bank_account TEXT,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS transactions (
    id TEXT PRIMARY KEY,
    profile_id TEXT,
    type TEXT NOT NULL,
    name TEXT,
    value REAL NOT NULL,
    date TEXT,
    category TEXT,
    notes TEXT,
    is_fixed_income INTEGER,
    frequency TEXT,
    priority TEXT,
    due_date TEXT,
    remaining_percentage REAL,
    amount_paid REAL,
    number_of_installments INTEGER,
    installment_value REAL,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS goals (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    target_amount REAL NOT NULL,
    current_amount REAL NOT NULL DEFAULT 0,
    deadline TEXT,
    created_at TEXT
);

CREATE INDEX IF NOT EXISTS ix_txn_date ON transactions (date);
CREATE INDEX IF NOT EXISTS ix_txn_profile ON transactions (profile_id);
"""

TRANSACTION_COLUMNS = [
    'id', 'profile_id', 'type', 'name', 'value', 'date', 'category', 'notes',
    'is_fixed_income', 'frequency', 'priority', 'due_date', 'remaining_percentage',
    'amount_paid', 'number_of_installments', 'installment_value',
]
GOAL_COLUMNS = ['id', 'name', 'target_amount', 'current_amount', 'deadline']


def _transaction_row(transaction: LedgerTransaction) -> Dict[str, Any]:
    record = transaction.to_record()
    row = {column: record.get(column) for column in TRANSACTION_COLUMNS}
    if row['is_fixed_income'] is not None:
        row['is_fixed_income'] = int(bool(row['is_fixed_income']))
    return row


class SQLiteStore(LedgerStore):
    """Ledger tables in a single SQLite file."""

    def __init__(self, db_path: Optional[Path] = None) -> None:
        if db_path is None:
            from ..config import DB_PATH, ensure_data_directories
            ensure_data_directories()
            db_path = DB_PATH
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.init_db()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        with self._operation('init_db') as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    @contextmanager
    def _operation(self, name: str) -> Iterator[sqlite3.Connection]:
        try:
            with self.connect() as conn:
                yield conn
        except sqlite3.Error as exc:
            logger.exception("SQLite %s failed on %s", name, self.db_path)
            raise StorageError(name, str(exc)) from exc

    def _fetch(self, name: str, sql: str) -> List[Dict[str, Any]]:
        with self._operation(name) as conn:
            return [dict(row) for row in conn.execute(sql).fetchall()]

    def _execute(self, name: str, sql: str, params) -> int:
        with self._operation(name) as conn:
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor.rowcount

    # Profiles ---------------------------------------------------------------

    def list_profiles(self) -> List[Profile]:
        rows = self._fetch('list_profiles', "SELECT id, name, type, bank_account FROM profiles ORDER BY created_at, rowid")
        return parse_rows('list_profiles', rows, profile_from_record)

    def create_profile(self, profile: Profile) -> Profile:
        profile = ensure_id(profile)
        self._execute(
            'create_profile',
            "INSERT INTO profiles (id, name, type, bank_account, created_at) VALUES (?, ?, ?, ?, ?)",
            (profile.id, profile.name, profile.type.value, profile.bank_account, datetime.now(timezone.utc).isoformat()),
        )
        return profile

    def delete_profile(self, profile_id: str) -> None:
        self._execute('delete_profile', "DELETE FROM profiles WHERE id = ?", (profile_id,))

    # Transactions -----------------------------------------------------------

    def list_transactions(self) -> List[LedgerTransaction]:
        rows = self._fetch(
            'list_transactions',
            f"SELECT {', '.join(TRANSACTION_COLUMNS)} FROM transactions ORDER BY date DESC, rowid DESC",
        )
        return parse_rows('list_transactions', rows, transaction_from_record)

    def create_transaction(self, transaction: LedgerTransaction) -> LedgerTransaction:
        transaction = ensure_id(transaction)
        row = _transaction_row(transaction)
        columns = TRANSACTION_COLUMNS + ['created_at']
        placeholders = ', '.join('?' for _ in columns)
        self._execute(
            'create_transaction',
            f"INSERT INTO transactions ({', '.join(columns)}) VALUES ({placeholders})",
            [row[column] for column in TRANSACTION_COLUMNS] + [datetime.now(timezone.utc).isoformat()],
        )
        return transaction

    def update_transaction(self, transaction: LedgerTransaction) -> LedgerTransaction:
        row = _transaction_row(transaction)
        assignments = ', '.join(f"{column} = ?" for column in TRANSACTION_COLUMNS[1:])
        updated = self._execute(
            'update_transaction',
            f"UPDATE transactions SET {assignments} WHERE id = ?",
            [row[column] for column in TRANSACTION_COLUMNS[1:]] + [transaction.id],
        )
        if updated == 0:
            raise StorageError('update_transaction', f"transaction {transaction.id} not found")
        return transaction

    def delete_transaction(self, transaction_id: str) -> None:
        self._execute('delete_transaction', "DELETE FROM transactions WHERE id = ?", (transaction_id,))

    # Goals ------------------------------------------------------------------

    def list_goals(self) -> List[Goal]:
        rows = self._fetch('list_goals', f"SELECT {', '.join(GOAL_COLUMNS)} FROM goals ORDER BY deadline, rowid")
        return parse_rows('list_goals', rows, goal_from_record)

    def create_goal(self, goal: Goal) -> Goal:
        goal = ensure_id(goal)
        self._execute(
            'create_goal',
            "INSERT INTO goals (id, name, target_amount, current_amount, deadline, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (goal.id, goal.name, goal.target_amount, goal.current_amount, goal.deadline, datetime.now(timezone.utc).isoformat()),
        )
        return goal

    def update_goal(self, goal: Goal) -> Goal:
        updated = self._execute(
            'update_goal',
            "UPDATE goals SET name = ?, target_amount = ?, current_amount = ?, deadline = ? WHERE id = ?",
            (goal.name, goal.target_amount, goal.current_amount, goal.deadline, goal.id),
        )
        if updated == 0:
            raise StorageError('update_goal', f"goal {goal.id} not found")
        return goal

    def delete_goal(self, goal_id: str) -> None:
        self._execute('delete_goal', "DELETE FROM goals WHERE id = ?", (goal_id,))

    # Bulk -------------------------------------------------------------------

    def clear_all(self) -> None:
        with self._operation('clear_all') as conn:
            conn.execute("DELETE FROM transactions")
            conn.execute("DELETE FROM goals")
            conn.execute("DELETE FROM profiles")
            conn.commit()
        logger.info("Cleared all ledger data in %s", self.db_path)
