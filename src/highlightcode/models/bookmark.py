"""Data models for code bookmarks.

These are plain dataclasses for the in-memory working set. The durable form
lives in ``highlightcode.models.records``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ColorLabel(StrEnum):
    """The semantic colors offered when creating a bookmark."""

    YELLOW = "Yellow"
    RED = "Red"
    GREEN = "Green"
    BLUE = "Blue"


# Renderable background per label. Kept as a table so palettes can be
# retuned per label without touching the labels written into source files.
COLOR_VALUES: dict[str, str] = {
    ColorLabel.YELLOW: "rgba(255, 255, 0, 0.3)",
    ColorLabel.RED: "rgba(255, 0, 0, 0.3)",
    ColorLabel.GREEN: "rgba(0, 255, 0, 0.3)",
    ColorLabel.BLUE: "rgba(0, 0, 255, 0.3)",
}

DEFAULT_COLOR_VALUE = COLOR_VALUES[ColorLabel.YELLOW]


def color_value_for(label: str) -> str:
    """Look up the render value for a color label (Yellow if unknown)."""
    return COLOR_VALUES.get(label, DEFAULT_COLOR_VALUE)


def normalize_name(name: str) -> str:
    """Normalise a bookmark name for uniqueness checks.

    All whitespace is removed and the result is case-folded, so
    ``"My Todo"`` and ``" mytodo "`` compare equal.
    """
    return "".join(name.split()).casefold()


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based line/character position in a document."""

    line: int
    character: int = 0


@dataclass(frozen=True)
class LineRange:
    """A span between two positions, start inclusive.

    Attributes:
        start: First position covered.
        end: Position just after the last covered character.
    """

    start: Position
    end: Position

    @classmethod
    def whole_lines(
        cls, start_line: int, end_line: int, end_character: int
    ) -> LineRange:
        """Build a range covering ``start_line`` to the end of ``end_line``."""
        return cls(Position(start_line, 0), Position(end_line, end_character))

    @property
    def line_count(self) -> int:
        return self.end.line - self.start.line + 1

    def overlaps(self, other: LineRange) -> bool:
        """Whether the two ranges share at least one line."""
        return (
            self.start.line <= other.end.line and other.start.line <= self.end.line
        )

    def shifted(self, lines: int) -> LineRange:
        """Return a copy moved down by ``lines`` lines."""
        return LineRange(
            Position(self.start.line + lines, self.start.character),
            Position(self.end.line + lines, self.end.character),
        )


@dataclass
class Bookmark:
    """A named, colored highlight over one or more ranges of a single file.

    Attributes:
        name: Display name, unique per file under ``normalize_name``.
        file_id: Identifier of the document the bookmark belongs to.
        color_label: Label written into the marker comments (e.g. "Yellow").
        ranges: Highlighted ranges in document order; never overlapping.
        decoration: Session-only handle from the rendering sink. Owned by
            this record and never persisted.
    """

    name: str
    file_id: str
    color_label: str
    ranges: list[LineRange] = field(default_factory=list)
    decoration: Any = field(default=None, compare=False, repr=False)

    @property
    def color_value(self) -> str:
        return color_value_for(self.color_label)

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)

    @property
    def line_count(self) -> int:
        """Total number of highlighted lines across all ranges."""
        return sum(r.line_count for r in self.ranges)
