#!/usr/bin/env python3
"""Start the FinControl dashboard; extra arguments go to ``streamlit run``."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

HOME_PAGE = Path(__file__).resolve().parent / "fincontrol" / "Home.py"


def main() -> int:
    return subprocess.call([sys.executable, "-m", "streamlit", "run", str(HOME_PAGE), *sys.argv[1:]])


if __name__ == "__main__":
    raise SystemExit(main())
