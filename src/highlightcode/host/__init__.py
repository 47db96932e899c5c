"""Host collaborator protocols and their in-memory implementations."""

from highlightcode.host.protocol import (
    EditorHostProtocol,
    KeyValueStoreProtocol,
    PromptProtocol,
    RenderingSinkProtocol,
)

__all__ = [
    "EditorHostProtocol",
    "KeyValueStoreProtocol",
    "PromptProtocol",
    "RenderingSinkProtocol",
]
