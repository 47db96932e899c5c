"""In-memory registry of live bookmarks for every known file.

The registry is an explicit object created at session start and passed to
every handler. It never touches decoration handles itself: removal methods
return the removed bookmarks and the caller disposes their handles.
"""

from __future__ import annotations

import logging

from highlightcode.errors import DuplicateNameError
from highlightcode.models import Bookmark, normalize_name

logger = logging.getLogger(__name__)


class BookmarkRegistry:
    """Bookmarks grouped by file, insertion order preserved."""

    def __init__(self) -> None:
        self._by_file: dict[str, list[Bookmark]] = {}

    def __len__(self) -> int:
        return sum(len(bms) for bms in self._by_file.values())

    def add(self, bookmark: Bookmark) -> None:
        """Add an interactively created bookmark.

        Raises:
            DuplicateNameError: If the file already has a bookmark whose
                normalised name equals this one's.
        """
        if self.find_by_normalized_name(bookmark.file_id, bookmark.name) is not None:
            raise DuplicateNameError(bookmark.name, bookmark.file_id)
        self._by_file.setdefault(bookmark.file_id, []).append(bookmark)

    def add_extracted(self, bookmark: Bookmark) -> None:
        """Add a bookmark recovered from document text or the store.

        The text is authoritative after a reload, so repeated names are kept
        as separate records instead of being rejected.
        """
        self._by_file.setdefault(bookmark.file_id, []).append(bookmark)

    def remove_by_file(self, file_id: str) -> list[Bookmark]:
        """Remove and return every bookmark of one file."""
        removed = self._by_file.pop(file_id, [])
        if removed:
            logger.debug("Removed %d bookmark(s) for %s", len(removed), file_id)
        return removed

    def clear_all(self) -> list[Bookmark]:
        """Remove and return every bookmark of every file."""
        removed = self.list_all()
        self._by_file.clear()
        return removed

    def find_by_normalized_name(self, file_id: str, name: str) -> Bookmark | None:
        """Find a bookmark in ``file_id`` ignoring whitespace and case."""
        wanted = normalize_name(name)
        for bookmark in self._by_file.get(file_id, ()):
            if bookmark.normalized_name == wanted:
                return bookmark
        return None

    def list_by_file(self, file_id: str) -> list[Bookmark]:
        return list(self._by_file.get(file_id, ()))

    def list_all(self) -> list[Bookmark]:
        return [b for bms in self._by_file.values() for b in bms]

    def file_ids(self) -> list[str]:
        return [fid for fid, bms in self._by_file.items() if bms]
