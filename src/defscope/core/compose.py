"""Compose copied text from a function match.

Three shapes are produced: the selection under its enclosing headers, the
whole function body under its ancestors' headers, and the definition
headers alone. Selections that skip code inside the matched function get an
omission marker on the side where code was skipped.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from defscope.core.definitions import extract_definition_block, extract_definition_header_line
from defscope.core.document import TextDocument
from defscope.models import DefinitionBlock, FunctionMatch, OutlineNode, Range

OMISSION_MARKER = "# ......"

_LEADING_WHITESPACE = re.compile(r"^\s*")


def _indentation(line: str) -> str:
    match = _LEADING_WHITESPACE.match(line)
    return match.group(0) if match else ""


def remove_root_indentation(text: str) -> str:
    """Strip the smallest leading-whitespace width shared by all non-blank lines."""
    lines = text.split("\n")
    widths = [len(_indentation(line)) for line in lines if line.strip()]
    if not widths:
        return "\n".join("" for _ in lines)
    root = min(widths)
    return "\n".join(line[root:] for line in lines)


def get_copy_range_for_function(node: OutlineNode) -> Range:
    """Body range from column 0 of the start line, so the original indentation survives."""
    return Range.of(node.span.start.line, 0, node.span.end.line, node.span.end.character)


def compose_function_with_parents_text(
    document: TextDocument, ancestors: Sequence[OutlineNode], node: OutlineNode
) -> str:
    headers = [extract_definition_header_line(document, ancestor) for ancestor in ancestors]
    body = document.get_text(get_copy_range_for_function(node))
    if not headers:
        return body
    return "\n".join([*headers, body])


def find_omission_lines(document: TextDocument, scope: Range, selection: Range) -> tuple[int | None, int | None]:
    """Return the nearest skipped code line before and after the selection, if any.

    Only whole lines strictly inside ``scope`` (never its opening or closing
    line) that hold non-whitespace text count. A selection ending at column 0
    of a later line leaves that line unselected.
    """
    first_selected = selection.start.line
    last_selected = selection.end.line
    if selection.end.character == 0 and last_selected > first_selected:
        last_selected -= 1

    lowest = scope.start.line + 1
    highest = min(scope.end.line - 1, document.line_count - 1)

    before = next(
        (line for line in range(min(first_selected - 1, highest), lowest - 1, -1) if document.line_at(line).strip()),
        None,
    )
    after = next(
        (line for line in range(max(last_selected + 1, lowest), highest + 1) if document.line_at(line).strip()),
        None,
    )
    return before, after


def _marker_line(document: TextDocument, line: int) -> str:
    return _indentation(document.line_at(line)) + OMISSION_MARKER


def compose_selection_with_parents_text(
    document: TextDocument,
    match: FunctionMatch,
    selected_text: str,
    selection: Range | None = None,
) -> str:
    """Prefix the selection with the single-line headers of the match and its ancestors.

    Without ``selection`` no omission markers are added.
    """
    parts = [extract_definition_header_line(document, node) for node in match.chain]

    before, after = (None, None)
    if selection is not None:
        before, after = find_omission_lines(document, match.node.span, selection)

    if before is not None:
        parts.append(_marker_line(document, before))
    parts.append(selected_text)

    text = "\n".join(parts)
    if after is not None:
        separator = "" if text.endswith("\n") else "\n"
        text = f"{text}{separator}{_marker_line(document, after)}"
    return text


def compose_definition_blocks(
    document: TextDocument, ancestors: Sequence[OutlineNode], node: OutlineNode
) -> list[DefinitionBlock]:
    return [extract_definition_block(document, each) for each in [*ancestors, node]]


def compose_function_definition_with_parents_text(
    document: TextDocument, ancestors: Sequence[OutlineNode], node: OutlineNode
) -> str:
    return "\n".join(block.text for block in compose_definition_blocks(document, ancestors, node))


def definition_envelope(blocks: Sequence[DefinitionBlock]) -> Range:
    """Span from the earliest block start to the end of the last (innermost) block."""
    earliest = min(blocks, key=lambda block: (block.start_line, block.start_char))
    innermost = blocks[-1]
    return Range.of(earliest.start_line, earliest.start_char, innermost.end_line, innermost.end_char)


def compose_qualified_name(match: FunctionMatch) -> str:
    names = (node.name.strip() for node in match.chain if node.kind.is_name_segment)
    return ".".join(name for name in names if name)
