#!/usr/bin/env python3
"""Import a legacy browser-store export into the configured ledger store."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fincontrol.config import LEGACY_STORE_PATH
from fincontrol.storage import StorageError, get_store, migrate_legacy_store


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=LEGACY_STORE_PATH,
        help="JSON export holding the fincontrol_* keys",
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if not args.path.exists():
        print(f"Legacy export not found: {args.path}")
        return 1

    try:
        counts = migrate_legacy_store(get_store(), args.path)
    except StorageError as exc:
        print(f"Migration failed: {exc}")
        return 1

    print(
        f"Imported {counts['profiles']} profiles, {counts['transactions']} transactions, "
        f"{counts['goals']} goals ({counts['skipped']} skipped)"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
