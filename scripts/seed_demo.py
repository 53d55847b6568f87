#!/usr/bin/env python3
"""Load the demo profiles and transactions, optionally after a factory reset."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fincontrol.storage import StorageError, get_store, seed_demo_data


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--reset", action="store_true", help="delete all existing data first")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        store = get_store()
        if args.reset:
            store.clear_all()
        elif store.has_profiles():
            print("Store already has profiles; use --reset to replace them.")
            return 1
        counts = seed_demo_data(store)
    except StorageError as exc:
        print(f"Seeding failed: {exc}")
        return 1

    print(f"Seeded {counts['profiles']} profiles and {counts['transactions']} transactions")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
