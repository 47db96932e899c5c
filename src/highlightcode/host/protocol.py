"""Protocols for the collaborators the engine talks to.

The editor integration (rendering, prompts, text edits) and the durable
store are supplied by the host. Real adapters and the recording doubles in
``highlightcode.host.mock`` implement these interchangeably.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from highlightcode.document import EditBatch, TextDocument
    from highlightcode.models import LineRange


class RenderingSinkProtocol(Protocol):
    """Applies colors to ranges of the visible editor."""

    def create_handle(self, color_value: str) -> Any:
        """Create a whole-line decoration style and return its handle."""
        ...

    def apply_ranges(self, handle: Any, ranges: Sequence[LineRange]) -> None:
        """Render ``handle``'s style over ``ranges`` in the visible editor."""
        ...

    def dispose(self, handle: Any) -> None:
        """Release a handle. Called exactly once per handle."""
        ...


class PromptProtocol(Protocol):
    """User-facing prompts and notifications."""

    async def pick_color(self, labels: Sequence[str]) -> str | None:
        """Ask the user for a color label. None if dismissed."""
        ...

    async def prompt_name(self, validator: Callable[[str], str | None]) -> str | None:
        """Ask for a bookmark name.

        Args:
            validator: Returns an error message for unacceptable input,
                or None when the value is acceptable.

        Returns:
            The accepted name, or None if dismissed.
        """
        ...

    def show_info(self, message: str) -> None: ...

    def show_warning(self, message: str) -> None: ...


class EditorHostProtocol(Protocol):
    """Text mutation and navigation primitives of the editor."""

    async def apply_edits(self, document: TextDocument, batch: EditBatch) -> bool:
        """Apply ``batch`` to ``document`` as one atomic edit.

        Returns:
            False if the host refused the edit (document unchanged).
        """
        ...

    def reveal(self, document: TextDocument, target: LineRange) -> None:
        """Scroll to and select ``target``."""
        ...


class KeyValueStoreProtocol(Protocol):
    """Durable JSON value storage keyed by string."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...
