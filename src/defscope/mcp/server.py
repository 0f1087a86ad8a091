"""FastMCP server exposing defscope's copy operations as tools."""

from __future__ import annotations

from collections.abc import Callable

from fastmcp import FastMCP

from defscope.clipboard.adapters import BufferClipboard
from defscope.core.commands import (
    CopyOutcome,
    EditorContext,
    copy_function_definition_with_parents,
    copy_function_qualified_name,
    copy_function_with_parents,
    copy_selection,
)
from defscope.core.config import CopySettings, load_settings
from defscope.core.document import TextDocument
from defscope.core.outline import get_document_outline, iter_nodes
from defscope.core.ports.outline import OutlineProvider
from defscope.models import Position, Selection
from defscope.outline.treesitter_adapter import TreeSitterOutlineProvider


def _position(line: int, column: int) -> Position:
    if line < 1 or column < 1:
        raise ValueError(f"Positions are one-based, got {line}:{column}")
    return Position(line=line - 1, character=column - 1)


def _result(outcome: CopyOutcome) -> str:
    if outcome.text is not None:
        return outcome.text
    return outcome.notice or ""


def create_mcp_server(
    settings: CopySettings | None = None,
    provider_factory: Callable[[], OutlineProvider] = TreeSitterOutlineProvider,
) -> FastMCP:
    """Create a FastMCP server; results are returned rather than copied to a clipboard."""

    mcp = FastMCP("defscope", instructions="Extract functions and their enclosing definitions from source files.")
    resolved_settings = settings or load_settings()

    def _context(path: str, line: int, column: int, language: str | None) -> EditorContext:
        position = _position(line, column)
        return EditorContext(
            document=TextDocument.from_path(path, language),
            selection=Selection.at(position.line, position.character),
        )

    @mcp.tool()
    async def copy_selection_with_parents(
        path: str,
        start_line: int,
        start_column: int,
        end_line: int,
        end_column: int,
        language: str | None = None,
    ) -> str:
        """Return a selection (one-based, end exclusive) under its enclosing definition headers."""
        context = EditorContext(
            document=TextDocument.from_path(path, language),
            selection=Selection.between(_position(start_line, start_column), _position(end_line, end_column)),
        )
        clipboard = BufferClipboard()
        return _result(await copy_selection(context, provider_factory(), clipboard, resolved_settings))

    @mcp.tool()
    async def function_with_parents(path: str, line: int, column: int, language: str | None = None) -> str:
        """Return the innermost function at a one-based position with its ancestors' headers."""
        clipboard = BufferClipboard()
        context = _context(path, line, column, language)
        return _result(await copy_function_with_parents(context, provider_factory(), clipboard, resolved_settings))

    @mcp.tool()
    async def function_definition(path: str, line: int, column: int, language: str | None = None) -> str:
        """Return only the definition headers of the function at a one-based position and its ancestors."""
        clipboard = BufferClipboard()
        context = _context(path, line, column, language)
        return _result(
            await copy_function_definition_with_parents(context, provider_factory(), clipboard, resolved_settings)
        )

    @mcp.tool()
    async def qualified_name(path: str, line: int, column: int, language: str | None = None) -> str:
        """Return the dotted qualified name of the function at a one-based position."""
        clipboard = BufferClipboard()
        context = _context(path, line, column, language)
        return _result(await copy_function_qualified_name(context, provider_factory(), clipboard))

    @mcp.tool()
    async def outline(path: str, language: str | None = None) -> list[dict[str, str | int]]:
        """List the named constructs of a file with one-based spans."""
        document = TextDocument.from_path(path, language)
        nodes = await get_document_outline(provider_factory(), document)
        return [
            {
                "name": node.name,
                "kind": node.kind.label,
                "depth": depth,
                "start_line": node.span.start.line + 1,
                "end_line": node.span.end.line + 1,
            }
            for depth, node in iter_nodes(nodes)
        ]

    return mcp
