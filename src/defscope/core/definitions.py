"""Definition header extraction.

Most languages contribute the single line holding the construct's name. For
indentation-significant languages a header may span several lines (wrapped
parameter lists, base-class lists) and may be preceded by decorators, so the
block is found by scanning upward over decorator lines and forward until the
header's bracket nesting closes on a line ending with ``:``.
"""

from __future__ import annotations

from dataclasses import dataclass

from defscope.core.document import TextDocument
from defscope.core.languages import is_indentation_significant
from defscope.models import DefinitionBlock, OutlineNode

DECORATOR_MARKER = "@"
COMMENT_MARKER = "#"

_OPENING_BRACKETS = frozenset("([{")
_CLOSING_BRACKETS = frozenset(")]}")
_QUOTES = frozenset("'\"")


@dataclass
class HeaderScanState:
    """Bracket depth and string-literal state carried from one header line to the next."""

    depth: int = 0
    quote_char: str | None = None
    triple_quoted: bool = False
    escape_next: bool = False

    @property
    def in_string(self) -> bool:
        return self.quote_char is not None

    @property
    def is_closed(self) -> bool:
        return self.depth == 0 and not self.in_string

    def scan_line(self, line: str) -> str:
        """Advance the state over ``line`` and return its visible code.

        Visible code is everything outside string literals and before a
        line comment.
        """
        visible: list[str] = []
        index = 0
        length = len(line)

        while index < length:
            char = line[index]

            if self.quote_char is not None:
                if self.triple_quoted:
                    if line.startswith(self.quote_char * 3, index):
                        self._close_string()
                        index += 3
                        continue
                    index += 1
                    continue

                if self.escape_next:
                    self.escape_next = False
                elif char == "\\":
                    self.escape_next = True
                elif char == self.quote_char:
                    self._close_string()
                index += 1
                continue

            if char == COMMENT_MARKER:
                break

            if char in _QUOTES:
                self.quote_char = char
                self.triple_quoted = line.startswith(char * 3, index)
                self.escape_next = False
                index += 3 if self.triple_quoted else 1
                continue

            visible.append(char)
            if char in _OPENING_BRACKETS:
                self.depth += 1
            elif char in _CLOSING_BRACKETS:
                self.depth = max(0, self.depth - 1)
            index += 1

        return "".join(visible)

    def _close_string(self) -> None:
        self.quote_char = None
        self.triple_quoted = False
        self.escape_next = False


def _fallback_text(node: OutlineNode) -> str:
    return f"{node.kind.label} {node.name}".strip()


def build_single_line_block(document: TextDocument, node: OutlineNode) -> DefinitionBlock:
    line = node.definition_line
    text = document.line_at(line).rstrip()
    if not text.strip():
        text = _fallback_text(node)
    return DefinitionBlock(text=text, start_line=line, start_char=0, end_line=line, end_char=len(text))


def extract_definition_header_line(document: TextDocument, node: OutlineNode) -> str:
    return build_single_line_block(document, node).text


def find_decorator_start_line(document: TextDocument, node: OutlineNode, anchor_line: int) -> int:
    """Walk upward over the contiguous decorator lines directly above ``anchor_line``.

    When the node's span begins above the anchor the walk stays inside the
    span; when the span begins on the anchor line, decorators above it are
    still attached to the definition.
    """
    floor = node.span.start.line if node.span.start.line < anchor_line else 0
    start_line = anchor_line
    while start_line > floor:
        if not document.line_at(start_line - 1).strip().startswith(DECORATOR_MARKER):
            break
        start_line -= 1
    return start_line


def find_header_end_line(document: TextDocument, anchor_line: int, max_line: int) -> int:
    state = HeaderScanState()
    for line in range(anchor_line, max_line + 1):
        visible = state.scan_line(document.line_at(line).rstrip())
        if state.is_closed and visible.rstrip().endswith(":"):
            return line
    return anchor_line


def build_multi_line_block(document: TextDocument, node: OutlineNode) -> DefinitionBlock:
    anchor_line = node.definition_line
    max_line = max(anchor_line, min(node.span.end.line, document.line_count - 1))
    start_line = find_decorator_start_line(document, node, anchor_line)
    end_line = find_header_end_line(document, anchor_line, max_line)

    lines = [document.line_at(line).rstrip() for line in range(start_line, end_line + 1)]
    text = "\n".join(lines)
    if not text.strip():
        return build_single_line_block(document, node)
    return DefinitionBlock(
        text=text,
        start_line=start_line,
        start_char=0,
        end_line=end_line,
        end_char=len(lines[-1]),
    )


def extract_definition_block(document: TextDocument, node: OutlineNode) -> DefinitionBlock:
    if is_indentation_significant(document.language):
        return build_multi_line_block(document, node)
    return build_single_line_block(document, node)
