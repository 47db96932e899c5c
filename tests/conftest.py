"""Shared pytest fixtures for Highlight Code tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from highlightcode.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None]:
    """Drop the cached Settings so env changes in one test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
