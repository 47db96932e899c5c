"""Tests for reconciliation of marker text into the registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from highlightcode.document import TextDocument
from highlightcode.models import Bookmark, LineRange, dump_records
from highlightcode.registry import BookmarkRegistry
from highlightcode.sync import reconcile, release

if TYPE_CHECKING:
    from highlightcode.host.mock import RecordingRenderingSink


class TestReconcile:
    """reconcile() rebuilds a file's entries from its markers."""

    def test_todo_scenario(
        self, todo_doc: TextDocument, sink: RecordingRenderingSink
    ) -> None:
        registry = BookmarkRegistry()

        (bookmark,) = reconcile(todo_doc, registry, sink, visible=True)

        assert bookmark.name == "Todo"
        assert bookmark.color_label == "Yellow"
        assert bookmark.ranges == [
            LineRange.whole_lines(0, 2, len('// /hl-code "Todo" Yellow'))
        ]
        assert registry.list_all() == [bookmark]

    def test_idempotent_apart_from_handles(
        self, todo_doc: TextDocument, sink: RecordingRenderingSink
    ) -> None:
        registry = BookmarkRegistry()

        first = reconcile(todo_doc, registry, sink, visible=True)
        snapshot_one = dump_records(registry.list_all())
        second = reconcile(todo_doc, registry, sink, visible=True)
        snapshot_two = dump_records(registry.list_all())

        assert snapshot_one == snapshot_two
        assert first[0].decoration is None  # released by the second pass
        assert second[0].decoration is not None
        assert sink.dispose_counts[sink.created[0].id] == 1

    def test_one_handle_per_match(self, sink: RecordingRenderingSink) -> None:
        text = (
            '// hl-code "Same" Red\na();\n// /hl-code "Same" Red\n'
            '// hl-code "Same" Red\nb();\n// /hl-code "Same" Red\n'
        )
        doc = TextDocument(file_id="s.js", language_id="javascript", text=text)

        found = reconcile(doc, BookmarkRegistry(), sink, visible=True)

        assert len(found) == 2
        assert found[0].decoration is not found[1].decoration
        assert len(sink.created) == 2

    def test_hidden_document_is_not_rendered(
        self, todo_doc: TextDocument, sink: RecordingRenderingSink
    ) -> None:
        registry = BookmarkRegistry()

        reconcile(todo_doc, registry, sink, visible=False)

        assert len(registry.list_all()) == 1
        assert sink.applied == []

    def test_visible_document_is_rendered(
        self, todo_doc: TextDocument, sink: RecordingRenderingSink
    ) -> None:
        (bookmark,) = reconcile(todo_doc, BookmarkRegistry(), sink, visible=True)

        assert sink.applied == [(bookmark.decoration, bookmark.ranges)]

    def test_markers_removed_from_text_drop_bookmarks(
        self, todo_doc: TextDocument, sink: RecordingRenderingSink
    ) -> None:
        registry = BookmarkRegistry()
        reconcile(todo_doc, registry, sink, visible=True)

        todo_doc.text = "foo();\n"
        reconcile(todo_doc, registry, sink, visible=True)

        assert registry.list_all() == []
        assert sink.live_handles == []

    def test_other_files_untouched(
        self, todo_doc: TextDocument, sink: RecordingRenderingSink
    ) -> None:
        registry = BookmarkRegistry()
        other = Bookmark(name="Keep", file_id="other.js", color_label="Blue")
        registry.add(other)

        reconcile(todo_doc, registry, sink, visible=True)

        assert registry.list_by_file("other.js") == [other]

    def test_malformed_start_yields_no_bookmark(
        self, sink: RecordingRenderingSink
    ) -> None:
        doc = TextDocument(
            file_id="x.js",
            language_id="javascript",
            text='// hl-code "X" Yellow\nfoo();\n',
        )
        assert reconcile(doc, BookmarkRegistry(), sink, visible=True) == []
        assert sink.created == []


class TestRelease:
    def test_release_disposes_once_even_if_called_twice(
        self, sink: RecordingRenderingSink
    ) -> None:
        bm = Bookmark(name="a", file_id="f", color_label="Red")
        bm.decoration = sink.create_handle(bm.color_value)

        assert release([bm], sink) == 1
        assert release([bm], sink) == 0
        assert sink.double_disposed == []
