"""Write the registry to the durable store and read it back.

The whole registry is saved as one list of handle-free records under a
single key; every save overwrites the previous value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from highlightcode.config import DEFAULT_STORE_KEY
from highlightcode.models import dump_records, load_records

if TYPE_CHECKING:
    from highlightcode.host.protocol import KeyValueStoreProtocol
    from highlightcode.models import BookmarkRecord
    from highlightcode.registry import BookmarkRegistry

logger = logging.getLogger(__name__)


class SqlKeyValueStore:
    """KeyValueStoreProtocol backed by the ``stored_value`` table."""

    async def get(self, key: str) -> Any | None:
        from highlightcode.db import get_value

        return await get_value(key)

    async def set(self, key: str, value: Any) -> None:
        from highlightcode.db import save_value

        await save_value(key, value)


class PersistenceSynchronizer:
    """Saves and loads registry snapshots.

    Attributes:
        store: Durable key-value backend.
        key: Store key holding the snapshot.
    """

    def __init__(
        self, store: KeyValueStoreProtocol, key: str = DEFAULT_STORE_KEY
    ) -> None:
        self.store = store
        self.key = key

    async def save(self, registry: BookmarkRegistry) -> int:
        """Overwrite the stored snapshot with the registry's contents.

        Returns:
            Number of records written.
        """
        records = dump_records(registry.list_all())
        await self.store.set(self.key, records)
        logger.info("Persisted %d bookmark record(s) under %s", len(records), self.key)
        return len(records)

    async def load(self) -> list[BookmarkRecord]:
        """Return the previously saved records, or an empty list.

        A stored value that fails validation is logged and treated as empty
        so a corrupt snapshot never blocks activation; the next save
        replaces it.
        """
        raw = await self.store.get(self.key)
        try:
            records = load_records(raw)
        except ValidationError:
            logger.warning("Ignoring unreadable bookmark snapshot under %s", self.key)
            return []
        logger.debug("Loaded %d bookmark record(s) from %s", len(records), self.key)
        return records
