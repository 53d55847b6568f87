"""Configuration management for FinControl.

This module centralizes all configuration values including paths, storage
backend selection, API credentials and display defaults. Values come from
environment variables (a ``.env`` file at the project root is honoured).
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Base project root - assumes this file is in fincontrol/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

load_dotenv(_PROJECT_ROOT / '.env')

# Data directories
DATA_DIR = Path(os.getenv("FINCONTROL_DATA_DIR", _PROJECT_ROOT / "data"))

# Local database
DB_PATH = Path(
    os.getenv("FINCONTROL_DB_PATH", DATA_DIR / "fincontrol.db")
).resolve()

# Export of the old browser-local store, consumed once by the migration
LEGACY_STORE_PATH = Path(
    os.getenv("FINCONTROL_LEGACY_PATH", DATA_DIR / "legacy_store.json")
).resolve()

# Storage backend: 'sqlite' or 'supabase'
STORAGE_BACKEND = os.getenv("FINCONTROL_STORAGE", "sqlite").strip().lower()

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Gemini
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

# Dashboard windows
UPCOMING_LIMIT = int(os.getenv("FINCONTROL_UPCOMING_LIMIT", "5"))
RECENT_LIMIT = int(os.getenv("FINCONTROL_RECENT_LIMIT", "5"))


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
