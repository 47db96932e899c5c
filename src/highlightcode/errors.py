"""Exceptions raised by bookmark operations.

Every error here is recoverable: the failing operation has made no change to
the document text, the registry or the store, and the user may simply retry.
The one partial case is a global clear, where documents the editor did
accept stay cleared and only the refused ones keep their bookmarks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class HighlightError(Exception):
    """Base class for all bookmark operation failures."""


class BookmarkValidationError(HighlightError):
    """The requested bookmark name is not acceptable."""


class DuplicateNameError(BookmarkValidationError):
    """A bookmark with a normalised-equal name already exists in the file."""

    def __init__(self, name: str, file_id: str) -> None:
        self.name = name
        self.file_id = file_id
        super().__init__(f"Bookmark name already exists: {name!r} in {file_id}")


class NoSelectionError(HighlightError):
    """Nothing was selected to highlight."""


class NoActiveDocumentError(HighlightError):
    """The command needs an active document and there is none."""


class DocumentChangedError(HighlightError):
    """The document was edited while the command waited for user input."""


class EditRejectedError(HighlightError):
    """The editor host refused to apply an edit batch.

    Attributes:
        file_ids: Documents whose edits were refused.
    """

    def __init__(self, message: str, file_ids: Iterable[str] = ()) -> None:
        self.file_ids = list(file_ids)
        super().__init__(message)


class OverlappingSelectionError(NoSelectionError):
    """Two selected spans share a line, so they cannot form one bookmark."""
