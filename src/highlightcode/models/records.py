"""Durable, handle-free bookmark records.

The persisted layout is a list of
``{name, color, ranges: [{start: {line, character}, end: {...}}], fileId}``
objects stored under one key and fully rewritten on every save.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from highlightcode.models.bookmark import Bookmark, LineRange, Position

if TYPE_CHECKING:
    from collections.abc import Iterable


class PositionRecord(BaseModel):
    line: int = Field(ge=0)
    character: int = Field(ge=0)


class RangeRecord(BaseModel):
    start: PositionRecord
    end: PositionRecord


class BookmarkRecord(BaseModel):
    """Persisted form of a Bookmark (decoration handle stripped)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    color: str
    ranges: list[RangeRecord] = Field(default_factory=list)
    file_id: str = Field(alias="fileId")

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> BookmarkRecord:
        return cls(
            name=bookmark.name,
            color=bookmark.color_label,
            ranges=[
                RangeRecord(
                    start=PositionRecord(
                        line=r.start.line, character=r.start.character
                    ),
                    end=PositionRecord(line=r.end.line, character=r.end.character),
                )
                for r in bookmark.ranges
            ],
            file_id=bookmark.file_id,
        )

    def to_bookmark(self) -> Bookmark:
        """Rebuild a Bookmark without a decoration handle."""
        return Bookmark(
            name=self.name,
            file_id=self.file_id,
            color_label=self.color,
            ranges=[
                LineRange(
                    Position(r.start.line, r.start.character),
                    Position(r.end.line, r.end.character),
                )
                for r in self.ranges
            ],
        )


_RECORD_LIST = TypeAdapter(list[BookmarkRecord])


def dump_records(bookmarks: Iterable[Bookmark]) -> list[dict[str, Any]]:
    """Serialise bookmarks to JSON-compatible dicts in the persisted layout."""
    return [
        BookmarkRecord.from_bookmark(b).model_dump(by_alias=True) for b in bookmarks
    ]


def load_records(raw: Any) -> list[BookmarkRecord]:
    """Validate a stored value back into records.

    Raises:
        pydantic.ValidationError: If the stored value has the wrong shape.
    """
    if raw is None:
        return []
    return _RECORD_LIST.validate_python(raw)
