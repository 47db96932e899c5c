"""Rebuild a file's bookmarks from the marker pairs in its text.

Reconciliation is a destructive resync, not a diff: every existing entry for
the file is released (its decoration handle disposed) and a fresh bookmark
with a fresh handle is built for each decoded pair. Recovered ranges cover
the marker lines as well as the body, the same shape the insertion planner
produces.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from highlightcode.markers import decode_all
from highlightcode.models import Bookmark

if TYPE_CHECKING:
    from collections.abc import Iterable

    from highlightcode.document import TextDocument
    from highlightcode.host.protocol import RenderingSinkProtocol
    from highlightcode.registry import BookmarkRegistry

logger = logging.getLogger(__name__)


def release(bookmarks: Iterable[Bookmark], sink: RenderingSinkProtocol) -> int:
    """Dispose the decoration handle of each bookmark exactly once.

    The handle reference is cleared after disposal so a bookmark that is
    released twice does not dispose twice.

    Returns:
        Number of handles disposed.
    """
    disposed = 0
    for bookmark in bookmarks:
        if bookmark.decoration is not None:
            sink.dispose(bookmark.decoration)
            bookmark.decoration = None
            disposed += 1
    return disposed


def render(bookmarks: Iterable[Bookmark], sink: RenderingSinkProtocol) -> None:
    """Apply decorations, creating a handle for any bookmark without one."""
    for bookmark in bookmarks:
        if bookmark.decoration is None:
            bookmark.decoration = sink.create_handle(bookmark.color_value)
        sink.apply_ranges(bookmark.decoration, bookmark.ranges)


def extract(document: TextDocument) -> list[Bookmark]:
    """Decode the document's marker pairs into handle-less bookmarks."""
    return [
        Bookmark(
            name=pair.name,
            file_id=document.file_id,
            color_label=pair.color_label,
            ranges=[pair.full_range],
        )
        for pair in decode_all(document.text, document.language_id)
    ]


def reconcile(
    document: TextDocument,
    registry: BookmarkRegistry,
    sink: RenderingSinkProtocol,
    *,
    visible: bool,
) -> list[Bookmark]:
    """Replace the registry's entries for ``document`` with its markers.

    Args:
        document: The document whose text is authoritative.
        registry: Registry to update in place.
        sink: Rendering sink owning the decoration handles.
        visible: Whether the document is in the visible editor. Hidden
            documents keep their entries without live decorations.

    Returns:
        The bookmarks now registered for the document.
    """
    released = release(registry.remove_by_file(document.file_id), sink)

    bookmarks = extract(document)
    for bookmark in bookmarks:
        bookmark.decoration = sink.create_handle(bookmark.color_value)
        registry.add_extracted(bookmark)

    if visible:
        render(bookmarks, sink)

    logger.info(
        "Reconciled %s: %d bookmark(s) from markers (%d handle(s) released)",
        document.file_id,
        len(bookmarks),
        released,
    )
    return bookmarks
