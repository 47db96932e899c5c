"""Plan marker insertions for a new bookmark.

Each selected span gets a start marker above its first line and an end
marker below its last line. Edits are expressed against the unmodified
document and applied as one batch; the resulting highlighted ranges are
computed here by tracking how many marker lines were inserted above each
span (two per span already processed, in document order).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from highlightcode.document import EditBatch
from highlightcode.errors import NoSelectionError, OverlappingSelectionError
from highlightcode.markers import encode
from highlightcode.models import LineRange

if TYPE_CHECKING:
    from collections.abc import Sequence

    from highlightcode.document import TextDocument

logger = logging.getLogger(__name__)

# Marker lines added per span: one start, one end.
LINES_PER_SPAN = 2


@dataclass(frozen=True)
class LineSpan:
    """Whole lines ``first`` to ``last`` inclusive."""

    first: int
    last: int

    def overlaps(self, other: LineSpan) -> bool:
        return self.first <= other.last and other.first <= self.last


@dataclass
class InsertionPlan:
    """Result of planning one highlight command.

    Attributes:
        ranges: Post-insertion highlighted ranges, in the caller's span order.
        batch: Edits to apply atomically to the unmodified document.
    """

    ranges: list[LineRange] = field(default_factory=list)
    batch: EditBatch = field(default_factory=EditBatch)


def widen_selections(selections: Sequence[LineRange | LineSpan]) -> list[LineSpan]:
    """Turn editor selections into whole-line spans, dropping empty ones.

    ``LineSpan`` values are already whole lines and pass through unchanged.

    Raises:
        NoSelectionError: If every selection is empty.
    """
    spans = [
        sel if isinstance(sel, LineSpan) else LineSpan(sel.start.line, sel.end.line)
        for sel in selections
        if isinstance(sel, LineSpan) or sel.start != sel.end
    ]
    if not spans:
        msg = "No code selected!"
        raise NoSelectionError(msg)
    return spans


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def plan_insertions(
    spans: Sequence[LineSpan],
    name: str,
    color_label: str,
    document: TextDocument,
    *,
    indent: bool = True,
) -> InsertionPlan:
    """Compute marker edits and resulting ranges for a bookmark.

    Args:
        spans: Whole-line spans in the order the user selected them.
        name: Bookmark name, already validated.
        color_label: Color label to write into the markers.
        document: Document the markers go into (read only).
        indent: Prefix markers with the first span line's indentation.

    Returns:
        The plan; ``ranges[i]`` corresponds to ``spans[i]``.

    Raises:
        NoSelectionError: If ``spans`` is empty or outside the document.
        OverlappingSelectionError: If two spans share a line.
    """
    if not spans:
        msg = "No code selected!"
        raise NoSelectionError(msg)

    lines = document.lines()
    for span in spans:
        if not 0 <= span.first <= span.last < len(lines):
            msg = f"Selection {span.first}-{span.last} is outside the document"
            raise NoSelectionError(msg)

    order = sorted(range(len(spans)), key=lambda i: spans[i].first)
    for prev, cur in zip(order, order[1:], strict=False):
        if spans[prev].overlaps(spans[cur]):
            msg = "Selected spans overlap"
            raise OverlappingSelectionError(msg)

    batch = EditBatch()
    shifted: dict[int, LineRange] = {}
    offset = 0
    for i in order:
        span = spans[i]
        prefix = _leading_whitespace(lines[span.first]) if indent else ""
        start_marker = prefix + encode(name, color_label, True, document.language_id)
        end_marker = prefix + encode(name, color_label, False, document.language_id)

        batch.insert(span.first, start_marker)
        batch.insert(span.last + 1, end_marker)

        shifted[i] = LineRange.whole_lines(
            span.first + offset,
            span.last + offset + LINES_PER_SPAN,
            len(end_marker),
        )
        offset += LINES_PER_SPAN

    logger.debug(
        "Planned %d marker pair(s) for %r in %s", len(spans), name, document.file_id
    )
    return InsertionPlan(ranges=[shifted[i] for i in range(len(spans))], batch=batch)
