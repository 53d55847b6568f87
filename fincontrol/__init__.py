"""FinControl - personal and small-business finance tracker.

The analytics layer (``payments``, ``aggregation``, ``schedule``, ``goals``)
is pure and has no Streamlit dependency; ``Home.py`` and ``pages/`` form the
multipage dashboard built on top of it.
"""

__version__ = "1.0.0"
