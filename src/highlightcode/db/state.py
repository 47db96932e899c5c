"""Repository functions for StoredValue rows."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from highlightcode.db.engine import get_session
from highlightcode.db.models import StoredValue


async def get_value(key: str) -> Any | None:
    """Load the value stored under ``key``, or None if never saved."""
    async with get_session() as session:
        row = await session.get(StoredValue, key)
        return None if row is None else row.value


async def save_value(key: str, value: Any) -> None:
    """Save or replace the value under ``key`` (upsert)."""
    async with get_session() as session:
        row = await session.get(StoredValue, key)
        if row:
            row.value = value
            row.updated_at = datetime.now(UTC)
        else:
            row = StoredValue(key=key, value=value)
        session.add(row)
        await session.flush()
