"""Tests for the insertion planner's line-shift bookkeeping."""

from __future__ import annotations

import pytest

from highlightcode.document import TextDocument
from highlightcode.errors import NoSelectionError, OverlappingSelectionError
from highlightcode.markers import encode
from highlightcode.models import LineRange, Position
from highlightcode.registry import BookmarkRegistry
from highlightcode.sync import LineSpan, plan_insertions, reconcile, widen_selections


class TestWidenSelections:
    """Selections become whole-line spans."""

    def test_partial_lines_widen_to_whole_lines(self) -> None:
        sel = LineRange(Position(2, 4), Position(5, 1))
        assert widen_selections([sel]) == [LineSpan(2, 5)]

    def test_empty_selections_dropped(self) -> None:
        empty = LineRange(Position(1, 3), Position(1, 3))
        real = LineRange(Position(4, 0), Position(4, 2))
        assert widen_selections([empty, real]) == [LineSpan(4, 4)]

    def test_all_empty_raises(self) -> None:
        empty = LineRange(Position(1, 3), Position(1, 3))
        with pytest.raises(NoSelectionError):
            widen_selections([empty])

    def test_line_spans_pass_through(self) -> None:
        assert widen_selections([LineSpan(3, 3)]) == [LineSpan(3, 3)]


class TestPlanInsertions:
    """Each span shifts every later span by two marker lines."""

    def test_three_spans_shift_by_two_per_previous_span(
        self, plain_doc: TextDocument, sink
    ) -> None:
        """Spans of 2, 1 and 3 lines shift by 0, 2 and 4 lines."""
        spans = [LineSpan(0, 1), LineSpan(3, 3), LineSpan(5, 7)]

        plan = plan_insertions(spans, "Batch", "Yellow", plain_doc)

        end_len = len(encode("Batch", "Yellow", False, "javascript"))
        assert plan.ranges == [
            LineRange.whole_lines(0, 3, end_len),
            LineRange.whole_lines(3 + 2, 3 + 2 + 2, end_len),
            LineRange.whole_lines(5 + 4, 7 + 4 + 2, end_len),
        ]

        plain_doc.apply(plan.batch)
        registry = BookmarkRegistry()
        recovered = reconcile(plain_doc, registry, sink, visible=True)

        assert [b.name for b in recovered] == ["Batch", "Batch", "Batch"]
        assert [b.ranges[0] for b in recovered] == plan.ranges

    def test_ranges_follow_caller_order(self, plain_doc: TextDocument) -> None:
        spans = [LineSpan(5, 7), LineSpan(0, 1)]

        plan = plan_insertions(spans, "Rev", "Red", plain_doc)

        assert plan.ranges[1].start.line == 0
        assert plan.ranges[0].start.line == 5 + 2
        assert plan.ranges[0].end.line == 7 + 2 + 2

    def test_adjacent_spans(self, plain_doc: TextDocument) -> None:
        spans = [LineSpan(0, 1), LineSpan(2, 2)]

        plan = plan_insertions(spans, "Adj", "Green", plain_doc)
        plain_doc.apply(plan.batch)

        lines = plain_doc.lines()
        assert lines[3] == encode("Adj", "Green", False, "javascript")
        assert lines[4] == encode("Adj", "Green", True, "javascript")
        assert plan.ranges[1] == LineRange.whole_lines(4, 6, len(lines[6]))

    def test_markers_copy_first_line_indentation(self) -> None:
        doc = TextDocument(
            file_id="m.py",
            language_id="python",
            text="def f():\n    x = 1\n    y = 2\n",
        )

        plan = plan_insertions([LineSpan(1, 2)], "Body", "Blue", doc)
        doc.apply(plan.batch)

        assert doc.lines()[1] == '    # hl-code "Body" Blue'
        assert doc.lines()[4] == '    # /hl-code "Body" Blue'
        assert plan.ranges[0].end.character == len(doc.lines()[4])

    def test_indentation_can_be_disabled(self) -> None:
        doc = TextDocument(file_id="m.py", language_id="python", text="    x\n")
        plan = plan_insertions([LineSpan(0, 0)], "N", "Red", doc, indent=False)
        doc.apply(plan.batch)
        assert doc.lines()[0] == '# hl-code "N" Red'

    def test_last_line_without_trailing_newline(self) -> None:
        doc = TextDocument(file_id="t.js", language_id="javascript", text="a();")
        plan = plan_insertions([LineSpan(0, 0)], "T", "Red", doc)
        doc.apply(plan.batch)
        assert doc.text == '// hl-code "T" Red\na();\n// /hl-code "T" Red'

    def test_overlapping_spans_rejected(self, plain_doc: TextDocument) -> None:
        with pytest.raises(OverlappingSelectionError):
            plan_insertions([LineSpan(0, 3), LineSpan(2, 4)], "O", "Red", plain_doc)

    def test_span_outside_document_rejected(self, plain_doc: TextDocument) -> None:
        with pytest.raises(NoSelectionError):
            plan_insertions([LineSpan(40, 41)], "O", "Red", plain_doc)

    def test_planning_does_not_touch_document(self, plain_doc: TextDocument) -> None:
        before = plain_doc.text
        plan_insertions([LineSpan(0, 0)], "P", "Red", plain_doc)
        assert plain_doc.text == before
        assert plain_doc.version == 0
