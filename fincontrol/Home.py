"""Main entry point for the FinControl Streamlit multipage app.

Renders the dashboard; pages in the pages/ directory appear in the sidebar
automatically.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from fincontrol import config
from fincontrol.shared_sidebar import render_shared_sidebar


def main() -> None:
    st.set_page_config(page_title="FinControl", page_icon="💰", layout="wide")
    sidebar_data = render_shared_sidebar()
    snapshot = sidebar_data['snapshot']
    ui = sidebar_data['ui']

    st.header("💰 Dashboard Financeiro")
    if not snapshot.is_loaded:
        st.info("Carregando dados...")
        return

    transactions = snapshot.transactions
    ui.render_stat_cards(transactions)
    ui.render_charts(transactions)

    col1, col2 = st.columns(2)
    with col1:
        ui.render_recent(transactions, snapshot.profiles, config.RECENT_LIMIT)
    with col2:
        ui.render_upcoming(transactions, config.UPCOMING_LIMIT)


if __name__ == "__main__":
    main()
