"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from highlightcode.document import TextDocument
from highlightcode.host.mock import (
    InMemoryEditorHost,
    InMemoryStore,
    RecordingRenderingSink,
    ScriptedPrompts,
)
from highlightcode.session import HighlightSession
from highlightcode.sync import PersistenceSynchronizer

TODO_TEXT = '// hl-code "Todo" Yellow\nfoo();\n// /hl-code "Todo" Yellow\n'

# Eight plain lines, used for the three-span planner scenario.
PLAIN_JS = "\n".join(f"line{i}();" for i in range(8)) + "\n"


@pytest.fixture
def sink() -> RecordingRenderingSink:
    return RecordingRenderingSink()


@pytest.fixture
def prompts() -> ScriptedPrompts:
    return ScriptedPrompts()


@pytest.fixture
def host() -> InMemoryEditorHost:
    return InMemoryEditorHost()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def persistence(store: InMemoryStore) -> PersistenceSynchronizer:
    return PersistenceSynchronizer(store)


@pytest.fixture
def session(
    sink: RecordingRenderingSink,
    prompts: ScriptedPrompts,
    host: InMemoryEditorHost,
    persistence: PersistenceSynchronizer,
) -> HighlightSession:
    return HighlightSession(
        sink=sink,
        prompts=prompts,
        host=host,
        persistence=persistence,
    )


@pytest.fixture
def todo_doc() -> TextDocument:
    return TextDocument(file_id="src/todo.js", language_id="javascript", text=TODO_TEXT)


@pytest.fixture
def plain_doc() -> TextDocument:
    return TextDocument(file_id="src/plain.js", language_id="javascript", text=PLAIN_JS)
