"""Session state, editor event handlers and the command surface.

A ``HighlightSession`` owns the bookmark registry for one editor session and
wires it to the host collaborators. Event handlers (activation, document
open, active editor change) run reconciliation to completion before they
return. Every sequence that mutates the registry runs under one
``asyncio.Lock``; prompts are awaited before the lock is taken and their
answers are re-validated once it is held.
"""

from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from highlightcode.document import EditBatch
from highlightcode.errors import (
    BookmarkValidationError,
    DocumentChangedError,
    DuplicateNameError,
    EditRejectedError,
    NoActiveDocumentError,
)
from highlightcode.markers import marker_line_numbers
from highlightcode.markers.marker_constants import FORBIDDEN_NAME_CHARS
from highlightcode.models import Bookmark, ColorLabel
from highlightcode.registry import BookmarkRegistry
from highlightcode.sync import (
    plan_insertions,
    reconcile,
    release,
    render,
    widen_selections,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from highlightcode.document import TextDocument
    from highlightcode.host.protocol import (
        EditorHostProtocol,
        PromptProtocol,
        RenderingSinkProtocol,
    )
    from highlightcode.models import LineRange
    from highlightcode.sync import LineSpan, PersistenceSynchronizer

logger = logging.getLogger(__name__)

EMPTY_NAME_MESSAGE = "Bookmark name cannot be empty"
DUPLICATE_NAME_MESSAGE = "Bookmark name already exists"
FORBIDDEN_NAME_MESSAGE = "Bookmark name cannot contain quotes or line breaks"


class ClearScope(StrEnum):
    """Which bookmarks ``clear_all`` removes."""

    DOCUMENT = "document"
    GLOBAL = "global"


class HighlightSession:
    """Bookmarks for one editor session.

    Attributes:
        registry: Live bookmarks of every known file.
        sink: Rendering sink owning decoration handles.
        prompts: User prompts and notifications.
        host: Editor edit/reveal primitives.
        persistence: Snapshot writer, called after every mutation.
        indent_markers: Indent new marker lines like the span they wrap.
    """

    def __init__(
        self,
        *,
        sink: RenderingSinkProtocol,
        prompts: PromptProtocol,
        host: EditorHostProtocol,
        persistence: PersistenceSynchronizer,
        indent_markers: bool = True,
    ) -> None:
        self.registry = BookmarkRegistry()
        self.sink = sink
        self.prompts = prompts
        self.host = host
        self.persistence = persistence
        self.indent_markers = indent_markers
        self._documents: dict[str, TextDocument] = {}
        self._active: TextDocument | None = None
        self._lock = asyncio.Lock()

    @property
    def active_document(self) -> TextDocument | None:
        return self._active

    def documents(self) -> list[TextDocument]:
        return list(self._documents.values())

    # --- Event handlers ---

    async def activate(
        self,
        active: TextDocument | None,
        open_documents: Iterable[TextDocument] = (),
    ) -> None:
        """Start the session: restore the stored snapshot, then reconcile.

        Bookmarks of files that are not open are restored from the store;
        open documents are rebuilt from their marker text.
        """
        async with self._lock:
            for doc in open_documents:
                self._documents[doc.file_id] = doc
            if active is not None:
                self._documents[active.file_id] = active
            self._active = active

            restored = 0
            for record in await self.persistence.load():
                if record.file_id in self._documents:
                    continue
                bookmark = record.to_bookmark()
                bookmark.decoration = self.sink.create_handle(bookmark.color_value)
                self.registry.add_extracted(bookmark)
                restored += 1
            logger.info("Restored %d bookmark(s) for unopened files", restored)

            for doc in self._documents.values():
                reconcile(doc, self.registry, self.sink, visible=doc is active)
            await self.persistence.save(self.registry)

    async def on_document_open(self, document: TextDocument) -> list[Bookmark]:
        """Handle a newly opened document."""
        async with self._lock:
            self._documents[document.file_id] = document
            bookmarks = reconcile(
                document,
                self.registry,
                self.sink,
                visible=document is self._active,
            )
            await self.persistence.save(self.registry)
        return bookmarks

    async def on_active_editor_change(
        self, document: TextDocument | None
    ) -> list[Bookmark]:
        """Handle a switch of the visible editor (None when none is visible)."""
        async with self._lock:
            self._active = document
            if document is None:
                return []
            self._documents[document.file_id] = document
            bookmarks = reconcile(document, self.registry, self.sink, visible=True)
            await self.persistence.save(self.registry)
        return bookmarks

    def on_document_close(self, document: TextDocument) -> None:
        """Forget a closed document. Its bookmarks stay registered."""
        self._documents.pop(document.file_id, None)
        if self._active is document:
            self._active = None

    async def deactivate(self) -> None:
        """End the session, disposing every decoration handle."""
        async with self._lock:
            disposed = release(self.registry.clear_all(), self.sink)
            self._documents.clear()
            self._active = None
        logger.info("Session closed, %d decoration(s) disposed", disposed)

    # --- Name validation ---

    def validate_name(self, file_id: str, value: str) -> str | None:
        """Return an error message for an unacceptable name, else None."""
        if not value.strip():
            return EMPTY_NAME_MESSAGE
        if FORBIDDEN_NAME_CHARS.intersection(value):
            return FORBIDDEN_NAME_MESSAGE
        if self.registry.find_by_normalized_name(file_id, value) is not None:
            return DUPLICATE_NAME_MESSAGE
        return None

    def _check_name(self, file_id: str, name: str) -> None:
        message = self.validate_name(file_id, name)
        if message == DUPLICATE_NAME_MESSAGE:
            raise DuplicateNameError(name, file_id)
        if message is not None:
            raise BookmarkValidationError(message)

    # --- Commands ---

    async def highlight(
        self,
        selections: Sequence[LineRange | LineSpan],
        name: str | None = None,
        color_label: str | None = None,
    ) -> Bookmark | None:
        """Create a bookmark over the selected lines of the active document.

        Missing ``name`` or ``color_label`` values are asked for through the
        prompts. A dismissed prompt aborts with no change.

        Returns:
            The new bookmark, or None if the user dismissed a prompt.

        Raises:
            NoActiveDocumentError: If no document is active.
            NoSelectionError: If every selection is empty.
            BookmarkValidationError: If the name is empty or unusable.
            DuplicateNameError: If the name is already taken in this file.
            EditRejectedError: If the host refused the marker edit.
            DocumentChangedError: If the document was edited while a prompt
                was open; the selection no longer matches its lines.
        """
        document = self._active
        if document is None:
            msg = "No active editor!"
            raise NoActiveDocumentError(msg)
        spans = widen_selections(selections)
        version = document.version

        labels = [str(c) for c in ColorLabel]
        if color_label is None:
            color_label = await self.prompts.pick_color(labels)
            if color_label is None:
                self.prompts.show_warning("No color selected!")
                return None
        elif color_label not in labels:
            msg = f"Unknown color {color_label!r}; expected one of {', '.join(labels)}"
            raise BookmarkValidationError(msg)

        if name is None:
            name = await self.prompts.prompt_name(
                lambda value: self.validate_name(document.file_id, value)
            )
            if name is None:
                self.prompts.show_warning("No bookmark name provided!")
                return None

        async with self._lock:
            # Prompts may have yielded to other handlers; check again.
            if document.version != version:
                msg = f"{document.file_id} changed while waiting for input"
                raise DocumentChangedError(msg)
            self._check_name(document.file_id, name)
            plan = plan_insertions(
                spans, name, color_label, document, indent=self.indent_markers
            )
            if not await self.host.apply_edits(document, plan.batch):
                msg = f"Editor refused to insert markers into {document.file_id}"
                raise EditRejectedError(msg)

            bookmark = Bookmark(
                name=name,
                file_id=document.file_id,
                color_label=color_label,
                ranges=plan.ranges,
            )
            self.registry.add(bookmark)
            if document is self._active:
                render([bookmark], self.sink)
            else:
                bookmark.decoration = self.sink.create_handle(bookmark.color_value)
            await self.persistence.save(self.registry)

        logger.info(
            "Created bookmark %r in %s over %d range(s)",
            name,
            document.file_id,
            len(bookmark.ranges),
        )
        self.prompts.show_info(
            f'Bookmark "{name}" created with {bookmark.line_count} line(s) highlighted!'
        )
        return bookmark

    async def _strip_markers(self, document: TextDocument) -> bool:
        batch = EditBatch()
        for line in marker_line_numbers(document.text, document.language_id):
            batch.delete(line)
        if not batch:
            return True
        return await self.host.apply_edits(document, batch)

    async def clear_all(self, scope: ClearScope = ClearScope.DOCUMENT) -> int:
        """Remove bookmarks and their marker lines.

        ``DOCUMENT`` clears the active document. ``GLOBAL`` strips markers
        from every open document and clears every file, except open
        documents whose edit the host refused: those keep their bookmarks
        and are reported once the rest is cleared.

        Returns:
            Number of bookmarks removed.

        Raises:
            NoActiveDocumentError: If ``DOCUMENT`` scope has no active document.
            EditRejectedError: If the host refused to strip markers. In
                ``DOCUMENT`` scope nothing changes; in ``GLOBAL`` scope the
                accepted documents stay cleared.
        """
        refused: list[str] = []
        async with self._lock:
            if scope is ClearScope.DOCUMENT:
                document = self._active
                if document is None:
                    msg = "No active editor!"
                    raise NoActiveDocumentError(msg)
                if not await self._strip_markers(document):
                    msg = f"Editor refused to remove markers from {document.file_id}"
                    raise EditRejectedError(msg, [document.file_id])
                removed = self.registry.remove_by_file(document.file_id)
            else:
                for document in self._documents.values():
                    if not await self._strip_markers(document):
                        refused.append(document.file_id)
                removed = []
                for file_id in self.registry.file_ids():
                    if file_id not in refused:
                        removed.extend(self.registry.remove_by_file(file_id))

            release(removed, self.sink)
            await self.persistence.save(self.registry)

        logger.info("Cleared %d bookmark(s) (%s)", len(removed), scope)
        if refused:
            logger.warning("Markers kept in %s: editor refused the edit", refused)
            msg = f"Editor refused to remove markers from {', '.join(refused)}"
            raise EditRejectedError(msg, refused)
        self.prompts.show_info("All highlights cleared!")
        return len(removed)

    def navigate_to(self, bookmark: Bookmark) -> LineRange:
        """Reveal the first range of ``bookmark`` in its document.

        Raises:
            NoActiveDocumentError: If the bookmark's file is not open.
            BookmarkValidationError: If the bookmark has no ranges.
        """
        document = self._documents.get(bookmark.file_id)
        if document is None:
            msg = f"{bookmark.file_id} is not open"
            raise NoActiveDocumentError(msg)
        if not bookmark.ranges:
            msg = f"Bookmark {bookmark.name!r} has no highlighted ranges"
            raise BookmarkValidationError(msg)
        target = bookmark.ranges[0]
        self.host.reveal(document, target)
        return target

    def bookmarks(self, file_id: str | None = None) -> list[Bookmark]:
        """List bookmarks of one file, or of every file."""
        if file_id is None:
            return self.registry.list_all()
        return self.registry.list_by_file(file_id)
