import asyncio
from collections.abc import Sequence
from typing import Any

from rich.table import Table

from defscope.cli.common import FileArgument, LanguageOption, OutlineJsonOption, console, get_provider, load_context
from defscope.core.outline import get_document_outline, iter_nodes
from defscope.models import Selection


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} symbols)")


def outline(
    file: FileArgument,
    language: LanguageOption = None,
    outline_json: OutlineJsonOption = None,
) -> None:
    """Show the normalized outline of a file."""
    context = load_context(file, Selection.at(0, 0), language)
    nodes = asyncio.run(get_document_outline(get_provider(outline_json), context.document))

    rows = []
    for depth, node in iter_nodes(nodes):
        span = node.span
        rows.append(
            (
                "  " * depth + node.name,
                node.kind.label,
                f"{span.start.line + 1}:{span.start.character + 1}",
                f"{span.end.line + 1}:{span.end.character + 1}",
            )
        )
    _render_table(["name", "kind", "start", "end"], rows)
