"""Command-line front end for Highlight Code.

Usage:
    highlight-code scan FILE...
    highlight-code add FILE --name NAME --color Yellow --lines 3-5 [--lines 9]
    highlight-code clear FILE... [--all]
    highlight-code list

Files are read from disk, bookmarks are kept in the configured store and
marker edits are written back to the files.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from highlightcode.document import TextDocument
from highlightcode.errors import HighlightError
from highlightcode.markers import language_for_path
from highlightcode.session import ClearScope, HighlightSession
from highlightcode.sync import LineSpan, PersistenceSynchronizer, SqlKeyValueStore

if TYPE_CHECKING:
    import argparse
    from collections.abc import Callable, Sequence

    from highlightcode.document import EditBatch
    from highlightcode.models import Bookmark, LineRange

logger = logging.getLogger(__name__)

console = Console()


# ---------------------------------------------------------------------------
# Terminal collaborators
# ---------------------------------------------------------------------------
class TerminalRenderingSink:
    """Rendering sink for a terminal: handles are counters, nothing is drawn."""

    def __init__(self) -> None:
        self._next = 0
        self.live: set[int] = set()

    def create_handle(self, color_value: str) -> int:
        self._next += 1
        self.live.add(self._next)
        logger.debug("Decoration %d created (%s)", self._next, color_value)
        return self._next

    def apply_ranges(self, handle: int, ranges: Sequence[LineRange]) -> None:
        logger.debug("Decoration %d applied to %d range(s)", handle, len(ranges))

    def dispose(self, handle: int) -> None:
        self.live.discard(handle)


class TerminalPrompts:
    """Prompts answered on the terminal via rich."""

    def __init__(self, con: Console) -> None:
        self.console = con

    async def pick_color(self, labels: Sequence[str]) -> str | None:
        answer = Prompt.ask(
            "Select highlight color", choices=list(labels), console=self.console
        )
        return answer or None

    async def prompt_name(self, validator: Callable[[str], str | None]) -> str | None:
        while True:
            answer = Prompt.ask("Enter bookmark name", console=self.console)
            if not answer:
                return None
            message = validator(answer)
            if message is None:
                return answer
            self.console.print(f"[yellow]{message}[/]")

    def show_info(self, message: str) -> None:
        self.console.print(f"[green]{message}[/]")

    def show_warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/] {message}")


class FileEditorHost:
    """Editor host that writes applied edits straight back to disk."""

    def __init__(self, con: Console) -> None:
        self.console = con

    async def apply_edits(self, document: TextDocument, batch: EditBatch) -> bool:
        document.apply(batch)
        with Path(document.file_id).open("w", encoding="utf-8", newline="") as fh:
            fh.write(document.text)
        return True

    def reveal(self, document: TextDocument, target: LineRange) -> None:
        self.console.print(
            f"{document.file_id}:{target.start.line + 1}-{target.end.line + 1}"
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _load_document(path: str, default_language: str) -> TextDocument:
    p = Path(path)
    if not p.is_file():
        console.print(f"[red]Error:[/] no such file: {path}")
        sys.exit(1)
    # newline="" keeps CRLF and CR line endings as they are on disk.
    with p.open(encoding="utf-8", newline="") as fh:
        text = fh.read()
    return TextDocument(
        file_id=str(p),
        language_id=language_for_path(p, default_language),
        text=text,
    )


def _parse_line_spec(spec: str) -> LineSpan:
    """Parse a 1-based ``A-B`` or ``A`` line spec into a 0-based span."""
    first, _, last = spec.partition("-")
    try:
        start = int(first)
        end = int(last) if last else start
    except ValueError:
        console.print(f"[red]Error:[/] invalid line range '{spec}'")
        sys.exit(1)
    if start < 1 or end < start:
        console.print(f"[red]Error:[/] invalid line range '{spec}'")
        sys.exit(1)
    return LineSpan(start - 1, end - 1)


def _bookmark_table(title: str, bookmarks: Sequence[Bookmark]) -> Table:
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Color")
    table.add_column("File")
    table.add_column("Lines")
    for b in bookmarks:
        lines = ", ".join(f"{r.start.line + 1}-{r.end.line + 1}" for r in b.ranges)
        table.add_row(b.name, b.color_label, b.file_id, lines)
    return table


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for highlight-code subcommands."""
    import argparse

    from highlightcode import get_version_string

    parser = argparse.ArgumentParser(
        prog="highlight-code",
        description="Named, colored code highlights stored as marker comments.",
    )
    parser.add_argument(
        "--version", action="version", version=get_version_string()
    )
    sub = parser.add_subparsers(dest="command", required=True)

    scan_p = sub.add_parser("scan", help="Read bookmarks from file markers")
    scan_p.add_argument("files", nargs="+", help="Files to scan")

    add_p = sub.add_parser("add", help="Wrap lines in bookmark markers")
    add_p.add_argument("file", help="File to annotate")
    add_p.add_argument(
        "--name", default=None, help="Bookmark name (prompted if omitted)"
    )
    add_p.add_argument(
        "--color", default=None, help="Color label (prompted if omitted)"
    )
    add_p.add_argument(
        "--lines",
        action="append",
        required=True,
        help="1-based line range A-B; repeat for several spans",
    )

    clear_p = sub.add_parser("clear", help="Remove bookmark markers")
    clear_p.add_argument("files", nargs="+", help="Files to clear")
    clear_p.add_argument(
        "--all", action="store_true", help="Clear every stored bookmark too"
    )

    sub.add_parser("list", help="List stored bookmarks")
    return parser


def _make_session() -> HighlightSession:
    from highlightcode.config import get_settings

    settings = get_settings()
    return HighlightSession(
        sink=TerminalRenderingSink(),
        prompts=TerminalPrompts(console),
        host=FileEditorHost(console),
        persistence=PersistenceSynchronizer(SqlKeyValueStore(), settings.store.key),
        indent_markers=settings.markers.indent_markers,
    )


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------
async def _cmd_scan(files: Sequence[str], default_language: str) -> None:
    session = _make_session()
    documents = [_load_document(f, default_language) for f in files]
    await session.activate(documents[0], documents)
    found = [b for d in documents for b in session.bookmarks(d.file_id)]
    if not found:
        console.print("[yellow]No bookmarks found.[/]")
    else:
        console.print(_bookmark_table("Bookmarks", found))
    await session.deactivate()


async def _cmd_add(
    file: str,
    line_specs: Sequence[str],
    *,
    name: str | None,
    color: str | None,
    default_language: str,
) -> None:
    session = _make_session()
    document = _load_document(file, default_language)
    spans = [_parse_line_spec(s) for s in line_specs]
    await session.activate(document, [document])
    try:
        bookmark = await session.highlight(spans, name=name, color_label=color)
    finally:
        await session.deactivate()
    if bookmark is None:
        sys.exit(1)
    console.print(_bookmark_table("Created", [bookmark]))


async def _cmd_clear(
    files: Sequence[str], *, everything: bool, default_language: str
) -> None:
    session = _make_session()
    documents = [_load_document(f, default_language) for f in files]
    await session.activate(documents[0], documents)
    try:
        if everything:
            removed = await session.clear_all(ClearScope.GLOBAL)
        else:
            removed = 0
            for document in documents:
                await session.on_active_editor_change(document)
                removed += await session.clear_all(ClearScope.DOCUMENT)
    finally:
        await session.deactivate()
    console.print(f"[green]Removed[/] {removed} bookmark(s).")


async def _cmd_list() -> None:
    session = _make_session()
    records = await session.persistence.load()
    if not records:
        console.print("[yellow]No stored bookmarks.[/]")
        return
    stored = [r.to_bookmark() for r in records]
    console.print(_bookmark_table("Stored bookmarks", stored))


def run(argv: Sequence[str] | None = None) -> None:
    """Run the highlight-code command line."""
    from highlightcode import _setup_logging
    from highlightcode.config import get_settings
    from highlightcode.db import close_db, init_db

    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()
    _setup_logging(settings.app.log_dir, settings.app.log_level)
    default_language = settings.markers.default_language

    async def _run() -> None:
        await init_db()
        try:
            match args.command:
                case "scan":
                    await _cmd_scan(args.files, default_language)
                case "add":
                    await _cmd_add(
                        args.file,
                        args.lines,
                        name=args.name,
                        color=args.color,
                        default_language=default_language,
                    )
                case "clear":
                    await _cmd_clear(
                        args.files,
                        everything=args.all,
                        default_language=default_language,
                    )
                case "list":
                    await _cmd_list()
        finally:
            await close_db()

    try:
        asyncio.run(_run())
    except HighlightError as exc:
        console.print(f"[red]Error:[/] {exc}")
        sys.exit(1)
