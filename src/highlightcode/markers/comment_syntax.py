"""Comment delimiters per language.

Marker lines must be valid comments in the host file so they never break
compilation or interpretation. Line-comment languages have an empty end
token.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath


@dataclass(frozen=True)
class CommentSyntax:
    """Start/end tokens of a single-line comment."""

    start: str
    end: str = ""


DEFAULT_SYNTAX = CommentSyntax("//")

_SLASH = CommentSyntax("//")
_HASH = CommentSyntax("#")
_DASH = CommentSyntax("--")
_PERCENT = CommentSyntax("%")
_SEMI = CommentSyntax(";")
_BLOCK_C = CommentSyntax("/*", "*/")
_HTML = CommentSyntax("<!--", "-->")

COMMENT_SYNTAX: dict[str, CommentSyntax] = {
    # C family
    "c": _SLASH,
    "cpp": _SLASH,
    "csharp": _SLASH,
    "dart": _SLASH,
    "go": _SLASH,
    "groovy": _SLASH,
    "java": _SLASH,
    "javascript": _SLASH,
    "javascriptreact": _SLASH,
    "jsonc": _SLASH,
    "kotlin": _SLASH,
    "objective-c": _SLASH,
    "php": _SLASH,
    "rust": _SLASH,
    "scala": _SLASH,
    "scss": _SLASH,
    "less": _SLASH,
    "swift": _SLASH,
    "typescript": _SLASH,
    "typescriptreact": _SLASH,
    # Hash comments
    "coffeescript": _HASH,
    "dockerfile": _HASH,
    "elixir": _HASH,
    "julia": _HASH,
    "makefile": _HASH,
    "perl": _HASH,
    "powershell": _HASH,
    "python": _HASH,
    "r": _HASH,
    "ruby": _HASH,
    "shellscript": _HASH,
    "toml": _HASH,
    "yaml": _HASH,
    "plaintext": _HASH,
    # Double dash
    "haskell": _DASH,
    "lua": _DASH,
    "sql": _DASH,
    # Others
    "erlang": _PERCENT,
    "latex": _PERCENT,
    "matlab": _PERCENT,
    "tex": _PERCENT,
    "clojure": _SEMI,
    "ini": _SEMI,
    "lisp": _SEMI,
    "scheme": _SEMI,
    "bat": CommentSyntax("REM"),
    "vb": CommentSyntax("'"),
    "vim": CommentSyntax('"'),
    "css": _BLOCK_C,
    "html": _HTML,
    "markdown": _HTML,
    "vue": _HTML,
    "xml": _HTML,
}

# File extension -> language id, for callers without an editor-supplied id.
EXTENSION_LANGUAGES: dict[str, str] = {
    ".bat": "bat",
    ".c": "c",
    ".cc": "cpp",
    ".clj": "clojure",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".css": "css",
    ".dart": "dart",
    ".ex": "elixir",
    ".exs": "elixir",
    ".erl": "erlang",
    ".go": "go",
    ".h": "c",
    ".hpp": "cpp",
    ".hs": "haskell",
    ".htm": "html",
    ".html": "html",
    ".ini": "ini",
    ".java": "java",
    ".jl": "julia",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".kt": "kotlin",
    ".less": "less",
    ".lua": "lua",
    ".m": "objective-c",
    ".md": "markdown",
    ".php": "php",
    ".pl": "perl",
    ".ps1": "powershell",
    ".py": "python",
    ".r": "r",
    ".rb": "ruby",
    ".rs": "rust",
    ".scala": "scala",
    ".scss": "scss",
    ".sh": "shellscript",
    ".sql": "sql",
    ".swift": "swift",
    ".tex": "latex",
    ".toml": "toml",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".txt": "plaintext",
    ".vb": "vb",
    ".vim": "vim",
    ".vue": "vue",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
}

_FILENAME_LANGUAGES: dict[str, str] = {
    "dockerfile": "dockerfile",
    "makefile": "makefile",
}


def resolve(language_id: str) -> CommentSyntax:
    """Return the comment tokens for a language id (``//`` if unknown)."""
    return COMMENT_SYNTAX.get(language_id.lower(), DEFAULT_SYNTAX)


def language_for_path(path: str | PurePath, default: str = "plaintext") -> str:
    """Guess a language id from a file name."""
    p = PurePath(path)
    by_name = _FILENAME_LANGUAGES.get(p.name.lower())
    if by_name is not None:
        return by_name
    return EXTENSION_LANGUAGES.get(p.suffix.lower(), default)
