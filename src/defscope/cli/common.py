"""Shared option types and wiring for the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from defscope.clipboard.adapters import ConsoleClipboard, SystemClipboard
from defscope.core.commands import CopyOutcome, EditorContext
from defscope.core.config import CopySettings, load_settings
from defscope.core.document import TextDocument
from defscope.core.ports.clipboard import ClipboardWriter
from defscope.core.ports.outline import OutlineProvider
from defscope.models import Position, Selection

console = Console()
err_console = Console(stderr=True)

FileArgument = Annotated[Path, typer.Argument(help="Source file to read.")]
LanguageOption = Annotated[
    str | None, typer.Option(help="Language name or code (e.g. python, js, ts). Detected from the file by default.")
]
OutlineJsonOption = Annotated[
    Path | None,
    typer.Option("--outline-json", help="Read the outline from a saved LSP documentSymbol JSON response."),
]
StdoutOption = Annotated[bool, typer.Option("--stdout", help="Print the result instead of copying it.")]
ConfigOption = Annotated[Path | None, typer.Option("--config", help="Path to a defscope.toml config file.")]
AtOption = Annotated[str, typer.Option("--at", help="Cursor position as one-based LINE:COL.")]


def parse_position(value: str) -> Position:
    """Parse a one-based ``LINE:COL`` (or bare ``LINE``) into a zero-based position."""
    line_text, _, column_text = value.strip().partition(":")
    try:
        line = int(line_text)
        column = int(column_text) if column_text else 1
    except ValueError:
        raise typer.BadParameter(f"Expected LINE:COL, got '{value}'") from None
    if line < 1 or column < 1:
        raise typer.BadParameter(f"Positions are one-based, got '{value}'")
    return Position(line=line - 1, character=column - 1)


def load_context(file: Path, selection: Selection, language: str | None) -> EditorContext:
    try:
        document = TextDocument.from_path(file, language)
    except (FileNotFoundError, ValueError) as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from None
    return EditorContext(document=document, selection=selection)


def get_provider(outline_json: Path | None) -> OutlineProvider:
    if outline_json is not None:
        from defscope.outline.json_adapter import JsonOutlineProvider

        return JsonOutlineProvider(outline_json)

    from defscope.outline.treesitter_adapter import TreeSitterOutlineProvider

    return TreeSitterOutlineProvider()


def get_clipboard(stdout: bool) -> ClipboardWriter:
    return ConsoleClipboard(console) if stdout else SystemClipboard()


def get_settings(config: Path | None) -> CopySettings:
    try:
        return load_settings(config)
    except FileNotFoundError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from None


def report(outcome: CopyOutcome, stdout: bool) -> None:
    if outcome.notice:
        err_console.print(f"[yellow]{outcome.notice}[/yellow]")
    elif outcome.copied and not stdout:
        err_console.print("[green]Copied[/green] to clipboard")
