"""Recording collaborators for tests and headless use.

These implement the protocols in ``highlightcode.host.protocol`` without an
editor: handles are counted, prompts are answered from a script, edits are
applied directly to the ``TextDocument`` and values are kept in a dict.
"""

from __future__ import annotations

import itertools
import json
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from highlightcode.document import EditBatch, TextDocument
    from highlightcode.models import LineRange


@dataclass(frozen=True)
class MockHandle:
    """Opaque decoration handle issued by ``RecordingRenderingSink``."""

    id: int
    color_value: str


class RecordingRenderingSink:
    """Rendering sink that records every call.

    Attributes:
        created: Handles in creation order.
        applied: (handle, ranges) for every ``apply_ranges`` call.
        dispose_counts: Number of ``dispose`` calls per handle id.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.created: list[MockHandle] = []
        self.applied: list[tuple[MockHandle, list[LineRange]]] = []
        self.dispose_counts: Counter[int] = Counter()

    def create_handle(self, color_value: str) -> MockHandle:
        handle = MockHandle(next(self._ids), color_value)
        self.created.append(handle)
        return handle

    def apply_ranges(self, handle: MockHandle, ranges: Sequence[LineRange]) -> None:
        self.applied.append((handle, list(ranges)))

    def dispose(self, handle: MockHandle) -> None:
        self.dispose_counts[handle.id] += 1

    @property
    def live_handles(self) -> list[MockHandle]:
        """Handles created but never disposed."""
        return [h for h in self.created if self.dispose_counts[h.id] == 0]

    @property
    def double_disposed(self) -> list[int]:
        return [hid for hid, n in self.dispose_counts.items() if n > 1]


class ScriptedPrompts:
    """Prompt double answering from preset values.

    ``None`` answers model a dismissed prompt. The name validator is run on
    the scripted name and its messages are kept in ``validation_messages``;
    a rejected name counts as dismissed.
    """

    def __init__(self, color: str | None = None, name: str | None = None) -> None:
        self.color = color
        self.name = name
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.validation_messages: list[str] = []

    async def pick_color(self, labels: Sequence[str]) -> str | None:
        if self.color is not None and self.color not in labels:
            return None
        return self.color

    async def prompt_name(self, validator: Callable[[str], str | None]) -> str | None:
        if self.name is None:
            return None
        message = validator(self.name)
        if message is not None:
            self.validation_messages.append(message)
            return None
        return self.name

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)


@dataclass
class InMemoryEditorHost:
    """Editor host that edits ``TextDocument`` objects directly.

    ``reject_edits`` refuses every edit; ``reject_files`` refuses edits to
    the listed file ids only.
    """

    reject_edits: bool = False
    reject_files: set[str] = field(default_factory=set)
    applied: list[EditBatch] = field(default_factory=list)
    revealed: list[tuple[str, LineRange]] = field(default_factory=list)

    async def apply_edits(self, document: TextDocument, batch: EditBatch) -> bool:
        if self.reject_edits or document.file_id in self.reject_files:
            return False
        document.apply(batch)
        self.applied.append(batch)
        return True

    def reveal(self, document: TextDocument, target: LineRange) -> None:
        self.revealed.append((document.file_id, target))


class InMemoryStore:
    """Key-value store in a dict; values round-trip through JSON."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self.writes = 0

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)
        self.writes += 1
