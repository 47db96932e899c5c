"""Data models for bookmarks, ranges and their persisted records."""

from highlightcode.models.bookmark import (
    COLOR_VALUES,
    DEFAULT_COLOR_VALUE,
    Bookmark,
    ColorLabel,
    LineRange,
    Position,
    color_value_for,
    normalize_name,
)
from highlightcode.models.records import (
    BookmarkRecord,
    dump_records,
    load_records,
)

__all__ = [
    "COLOR_VALUES",
    "DEFAULT_COLOR_VALUE",
    "Bookmark",
    "BookmarkRecord",
    "ColorLabel",
    "LineRange",
    "Position",
    "color_value_for",
    "dump_records",
    "load_records",
    "normalize_name",
]
