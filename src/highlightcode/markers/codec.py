"""Encoding and decoding of bookmark marker comment lines.

Decoding works line by line: each line is matched against a pattern built
from the escaped comment tokens of the document's language, then start and
end lines are paired in a single left-to-right pass.

Pairing rule: a start line pairs with the first following end line that has
the same name (exact, case-sensitive) and the same color. The pair consumes
every line up to and including that end line, so marker lines nested inside
a pair are never reused. A start line without a matching end is dropped and
scanning resumes on the next line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from highlightcode.document import LineIndex, split_lines
from highlightcode.markers.comment_syntax import CommentSyntax, resolve
from highlightcode.markers.marker_constants import END_TAG, MARKER_TEMPLATE, START_TAG
from highlightcode.models import LineRange, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerLine:
    """One parsed marker comment line."""

    is_start: bool
    name: str
    color_label: str


@dataclass(frozen=True)
class MarkerPair:
    """A matched start/end marker pair found in a document.

    Attributes:
        name: Bookmark name from the markers.
        color_label: Color label from the markers.
        start_line: Line of the start marker.
        end_line: Line of the end marker.
        full_range: From the start of the start marker line to the end of
            the end marker line (terminator excluded).
    """

    name: str
    color_label: str
    start_line: int
    end_line: int
    full_range: LineRange


def encode(name: str, color_label: str, is_start: bool, language_id: str) -> str:
    """Encode one marker line for a bookmark.

    Args:
        name: Bookmark name (must not contain quotes or line breaks).
        color_label: Color label, e.g. "Yellow".
        is_start: True for the opening marker, False for the closing one.
        language_id: Language of the host document.

    Returns:
        A single line without terminator, trailing whitespace trimmed.
    """
    syntax = resolve(language_id)
    return MARKER_TEMPLATE.format(
        start=syntax.start,
        tag=START_TAG if is_start else END_TAG,
        name=name,
        color=color_label,
        end=syntax.end,
    ).rstrip()


@lru_cache(maxsize=64)
def _marker_pattern(syntax: CommentSyntax) -> re.Pattern[str]:
    end = rf"\s*{re.escape(syntax.end)}" if syntax.end else ""
    return re.compile(
        rf"^\s*{re.escape(syntax.start)}\s*"
        rf"(?P<tag>{re.escape(END_TAG)}|{re.escape(START_TAG)})\s+"
        r'"(?P<name>[^"]*)"\s+'
        r'(?P<color>[^\s"]+?)'
        rf"{end}\s*$"
    )


def parse_line(line: str, language_id: str) -> MarkerLine | None:
    """Parse a single line as a marker, or return None if it is not one."""
    m = _marker_pattern(resolve(language_id)).match(line)
    if m is None:
        return None
    return MarkerLine(
        is_start=m.group("tag") == START_TAG,
        name=m.group("name"),
        color_label=m.group("color"),
    )


def _find_end(
    markers: dict[int, MarkerLine], start: int, opener: MarkerLine, line_count: int
) -> int | None:
    for j in range(start + 1, line_count):
        candidate = markers.get(j)
        if (
            candidate is not None
            and not candidate.is_start
            and candidate.name == opener.name
            and candidate.color_label == opener.color_label
        ):
            return j
    return None


def decode_all(text: str, language_id: str) -> list[MarkerPair]:
    """Find every valid marker pair in ``text``.

    Malformed input (a start with no matching end, or an end whose color
    differs from its start) is excluded rather than reported.

    Returns:
        Pairs in document order.
    """
    lines = split_lines(text)
    markers: dict[int, MarkerLine] = {}
    for i, line in enumerate(lines):
        parsed = parse_line(line, language_id)
        if parsed is not None:
            markers[i] = parsed

    index = LineIndex(text)
    pairs: list[MarkerPair] = []
    i = 0
    while i < len(lines):
        opener = markers.get(i)
        if opener is None or not opener.is_start:
            i += 1
            continue
        end = _find_end(markers, i, opener, len(lines))
        if end is None:
            logger.debug(
                "Unmatched start marker %r (%s) at line %d",
                opener.name,
                opener.color_label,
                i,
            )
            i += 1
            continue
        end_offset = index.offset_at(Position(end, len(lines[end])))
        pairs.append(
            MarkerPair(
                name=opener.name,
                color_label=opener.color_label,
                start_line=i,
                end_line=end,
                full_range=LineRange(
                    index.position_at(index.line_start(i)),
                    index.position_at(end_offset),
                ),
            )
        )
        i = end + 1
    return pairs


def marker_line_numbers(text: str, language_id: str) -> set[int]:
    """Return the line numbers occupied by marker lines of valid pairs."""
    lines: set[int] = set()
    for pair in decode_all(text, language_id):
        lines.add(pair.start_line)
        lines.add(pair.end_line)
    return lines
