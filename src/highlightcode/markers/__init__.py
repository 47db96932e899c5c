"""Marker comment syntax, encoding and decoding."""

from highlightcode.markers.codec import (
    MarkerLine,
    MarkerPair,
    decode_all,
    encode,
    marker_line_numbers,
    parse_line,
)
from highlightcode.markers.comment_syntax import (
    CommentSyntax,
    language_for_path,
    resolve,
)

__all__ = [
    "CommentSyntax",
    "MarkerLine",
    "MarkerPair",
    "decode_all",
    "encode",
    "language_for_path",
    "marker_line_numbers",
    "parse_line",
    "resolve",
]
