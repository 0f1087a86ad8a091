import asyncio
from collections.abc import Coroutine
from enum import Enum
from typing import Annotated, Any

import typer

from defscope.cli.common import (
    AtOption,
    ConfigOption,
    FileArgument,
    LanguageOption,
    OutlineJsonOption,
    StdoutOption,
    err_console,
    get_clipboard,
    get_provider,
    get_settings,
    load_context,
    parse_position,
    report,
)
from defscope.clipboard.adapters import ClipboardUnavailableError
from defscope.core.commands import (
    CopyOutcome,
    copy_file,
    copy_function_definition_with_parents,
    copy_function_qualified_name,
    copy_function_with_parents,
    copy_selection,
)
from defscope.models import Selection

copy_app = typer.Typer(help="Copy code with its enclosing definitions.")


class CursorEnd(str, Enum):
    start = "start"
    end = "end"


def _run(operation: Coroutine[Any, Any, CopyOutcome], stdout: bool) -> None:
    try:
        outcome = asyncio.run(operation)
    except ClipboardUnavailableError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from None
    report(outcome, stdout)


@copy_app.command("selection")
def selection(
    file: FileArgument,
    start: Annotated[str, typer.Option("--start", help="Selection start as one-based LINE:COL.")],
    end: Annotated[str, typer.Option("--end", help="Selection end as one-based LINE:COL.")],
    active: Annotated[CursorEnd, typer.Option(help="Which end of the selection holds the cursor.")] = CursorEnd.end,
    language: LanguageOption = None,
    outline_json: OutlineJsonOption = None,
    stdout: StdoutOption = False,
    config: ConfigOption = None,
) -> None:
    """Copy a selection prefixed by its enclosing definition headers."""
    start_position, end_position = parse_position(start), parse_position(end)
    chosen = (
        Selection.between(end_position, start_position)
        if active is CursorEnd.start
        else Selection.between(start_position, end_position)
    )
    context = load_context(file, chosen, language)
    _run(copy_selection(context, get_provider(outline_json), get_clipboard(stdout), get_settings(config)), stdout)


@copy_app.command("file")
def file_(
    file: FileArgument,
    language: LanguageOption = None,
    stdout: StdoutOption = False,
    config: ConfigOption = None,
) -> None:
    """Copy a whole file through the output template."""
    context = load_context(file, Selection.at(0, 0), language)
    _run(copy_file(context, get_clipboard(stdout), get_settings(config)), stdout)


@copy_app.command("function")
def function(
    file: FileArgument,
    at: AtOption,
    language: LanguageOption = None,
    outline_json: OutlineJsonOption = None,
    stdout: StdoutOption = False,
    config: ConfigOption = None,
) -> None:
    """Copy the innermost function at the cursor with its ancestors' headers."""
    position = parse_position(at)
    context = load_context(file, Selection.at(position.line, position.character), language)
    _run(
        copy_function_with_parents(context, get_provider(outline_json), get_clipboard(stdout), get_settings(config)),
        stdout,
    )


@copy_app.command("definition")
def definition(
    file: FileArgument,
    at: AtOption,
    language: LanguageOption = None,
    outline_json: OutlineJsonOption = None,
    stdout: StdoutOption = False,
    config: ConfigOption = None,
) -> None:
    """Copy only the definition headers of the function at the cursor and its ancestors."""
    position = parse_position(at)
    context = load_context(file, Selection.at(position.line, position.character), language)
    _run(
        copy_function_definition_with_parents(
            context, get_provider(outline_json), get_clipboard(stdout), get_settings(config)
        ),
        stdout,
    )


@copy_app.command("qualified-name")
def qualified_name(
    file: FileArgument,
    at: AtOption,
    language: LanguageOption = None,
    outline_json: OutlineJsonOption = None,
    stdout: StdoutOption = False,
) -> None:
    """Copy the dotted name (Class.method.inner) of the function at the cursor."""
    position = parse_position(at)
    context = load_context(file, Selection.at(position.line, position.character), language)
    _run(copy_function_qualified_name(context, get_provider(outline_json), get_clipboard(stdout)), stdout)
