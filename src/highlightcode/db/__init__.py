"""Database module for Highlight Code.

Provides the async SQLModel key-value table backing the bookmark store.
"""

from __future__ import annotations

from highlightcode.db.engine import close_db, get_session, init_db
from highlightcode.db.models import StoredValue
from highlightcode.db.state import get_value, save_value

__all__ = [
    "StoredValue",
    "close_db",
    "get_session",
    "get_value",
    "init_db",
    "save_value",
]
