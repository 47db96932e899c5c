"""Text documents, line/offset mapping and atomic line edits.

A ``TextDocument`` is the engine's view of one open file: its identity, its
language id and its current text. Edits are expressed against the text as it
was when the batch was planned and are applied all at once, so no observer
ever sees a partially shifted document.

Lines end at ``\\r\\n``, ``\\r`` or ``\\n``, the same breaks an editor counts.
Mixed terminators are kept as they are; only inserted lines use the
document's first terminator.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass, field

from highlightcode.models import Position

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def detect_eol(text: str) -> str:
    """Return the first line terminator in ``text``, or LF if there is none."""
    m = _LINE_BREAK.search(text)
    return m.group() if m else "\n"


def split_lines(text: str) -> list[str]:
    """Split text into lines without terminators.

    A trailing terminator yields a final empty line.
    """
    return _LINE_BREAK.split(text)


def _split_keep_terminators(text: str) -> list[tuple[str, str]]:
    """Split text into ``(content, terminator)`` pairs.

    The last pair always has an empty terminator.
    """
    parts: list[tuple[str, str]] = []
    pos = 0
    for m in _LINE_BREAK.finditer(text):
        parts.append((text[pos : m.start()], m.group()))
        pos = m.end()
    parts.append((text[pos:], ""))
    return parts


class LineIndex:
    """Maps character offsets to (line, character) positions and back."""

    def __init__(self, text: str) -> None:
        self._length = len(text)
        self._starts = [0] + [m.end() for m in _LINE_BREAK.finditer(text)]

    def line_start(self, line: int) -> int:
        return self._starts[line]

    def position_at(self, offset: int) -> Position:
        """Convert an offset into a position, clamping to the text bounds."""
        offset = max(0, min(offset, self._length))
        line = bisect.bisect_right(self._starts, offset) - 1
        return Position(line, offset - self._starts[line])

    def offset_at(self, position: Position) -> int:
        if position.line >= len(self._starts):
            return self._length
        return min(self._starts[position.line] + position.character, self._length)


@dataclass(frozen=True)
class LineInsert:
    """Insert ``text`` as a new line before original line ``line``.

    ``line`` equal to the document's line count appends after the last line.
    """

    line: int
    text: str


@dataclass
class EditBatch:
    """Line insertions and deletions applied atomically.

    All line numbers refer to the document as it was before the batch.
    Insertions at the same line keep their batch order.
    """

    inserts: list[LineInsert] = field(default_factory=list)
    deletes: set[int] = field(default_factory=set)

    def __bool__(self) -> bool:
        return bool(self.inserts or self.deletes)

    def insert(self, line: int, text: str) -> None:
        self.inserts.append(LineInsert(line, text))

    def delete(self, line: int) -> None:
        self.deletes.add(line)

    def apply_to(self, text: str) -> str:
        """Return ``text`` with every edit of the batch applied.

        Kept lines keep their own terminators; inserted lines use the
        document's first terminator.
        """
        eol = detect_eol(text)
        lines = _split_keep_terminators(text)
        pending: dict[int, list[str]] = {}
        for ins in self.inserts:
            if not 0 <= ins.line <= len(lines):
                msg = f"insert line {ins.line} outside document of {len(lines)} lines"
                raise ValueError(msg)
            pending.setdefault(ins.line, []).append(ins.text)

        result: list[tuple[str, str]] = []
        for i, line in enumerate(lines):
            result.extend((new, eol) for new in pending.get(i, ()))
            if i not in self.deletes:
                result.append(line)
        result.extend((new, eol) for new in pending.get(len(lines), ()))

        last = len(result) - 1
        return "".join(
            content + ((terminator or eol) if k < last else "")
            for k, (content, terminator) in enumerate(result)
        )


@dataclass
class TextDocument:
    """One open document.

    Attributes:
        file_id: Stable identifier (usually the file URI or path).
        language_id: Editor language id, used to pick comment tokens.
        text: Current full text.
        version: Incremented on every applied edit batch.
    """

    file_id: str
    language_id: str
    text: str = ""
    version: int = 0

    def lines(self) -> list[str]:
        return split_lines(self.text)

    def apply(self, batch: EditBatch) -> None:
        """Apply an edit batch in one step."""
        self.text = batch.apply_to(self.text)
        self.version += 1
