"""SQLModel table for the durable key-value store."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime, String
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


class StoredValue(SQLModel, table=True):
    """One JSON value under a string key. Overwritten in full on save."""

    __tablename__ = "stored_value"

    key: str = Field(sa_column=Column(String(200), primary_key=True, nullable=False))
    value: Any = Field(default=None, sa_column=Column(JSON, nullable=True))
    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
