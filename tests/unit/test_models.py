"""Tests for bookmark models and persisted records."""

from __future__ import annotations

import pydantic
import pytest

from highlightcode.models import (
    COLOR_VALUES,
    Bookmark,
    BookmarkRecord,
    ColorLabel,
    LineRange,
    Position,
    color_value_for,
    dump_records,
    load_records,
    normalize_name,
)


class TestColors:
    """Color labels map to render values through a table."""

    def test_every_label_has_a_value(self) -> None:
        assert set(COLOR_VALUES) == set(ColorLabel)

    def test_unknown_label_falls_back_to_yellow(self) -> None:
        assert color_value_for("Mauve") == COLOR_VALUES[ColorLabel.YELLOW]

    def test_bookmark_color_value(self) -> None:
        bm = Bookmark(name="x", file_id="f", color_label="Red")
        assert bm.color_value == "rgba(255, 0, 0, 0.3)"


class TestNormalizeName:
    def test_strips_whitespace_and_case(self) -> None:
        assert normalize_name("  My\tTodo ") == normalize_name("mytodo")

    def test_distinct_names_stay_distinct(self) -> None:
        assert normalize_name("todo1") != normalize_name("todo2")


class TestLineRange:
    def test_overlaps(self) -> None:
        a = LineRange.whole_lines(0, 3, 5)
        b = LineRange.whole_lines(3, 6, 0)
        c = LineRange.whole_lines(4, 6, 0)
        assert a.overlaps(b)
        assert not a.overlaps(c)

    def test_shifted(self) -> None:
        assert LineRange.whole_lines(1, 2, 4).shifted(2) == LineRange(
            Position(3, 0), Position(4, 4)
        )


class TestRecords:
    """Records use the persisted layout and never carry handles."""

    def test_dump_uses_persisted_layout(self) -> None:
        bm = Bookmark(
            name="Todo",
            file_id="src/a.js",
            color_label="Yellow",
            ranges=[LineRange.whole_lines(0, 2, 25)],
            decoration=object(),
        )

        (record,) = dump_records([bm])

        assert record == {
            "name": "Todo",
            "color": "Yellow",
            "ranges": [
                {
                    "start": {"line": 0, "character": 0},
                    "end": {"line": 2, "character": 25},
                }
            ],
            "fileId": "src/a.js",
        }

    def test_load_rebuilds_bookmarks_without_handles(self) -> None:
        bm = Bookmark(
            name="Todo",
            file_id="f",
            color_label="Blue",
            ranges=[LineRange.whole_lines(4, 9, 3)],
            decoration="handle",
        )

        (record,) = load_records(dump_records([bm]))
        restored = record.to_bookmark()

        assert restored == bm
        assert restored.decoration is None

    def test_load_none_is_empty(self) -> None:
        assert load_records(None) == []

    def test_load_rejects_wrong_shape(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            load_records([{"name": "x"}])

    def test_record_accepts_field_name(self) -> None:
        record = BookmarkRecord(name="n", color="Red", file_id="f")
        assert record.model_dump(by_alias=True)["fileId"] == "f"
