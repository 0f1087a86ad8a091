from __future__ import annotations

import logging
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, QueryCursor
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from defscope.core.document import TextDocument
from defscope.core.outline import nest_nodes
from defscope.models import OutlineNode, Position, Range, SymbolKind

logger = logging.getLogger(__name__)

_QUERIES_DIR = Path(__file__).parent.parent / "queries"

_CAPTURE_KINDS = {
    "definition.namespace": SymbolKind.NAMESPACE,
    "definition.class": SymbolKind.CLASS,
    "definition.function": SymbolKind.FUNCTION,
    "definition.method": SymbolKind.METHOD,
}

_CONSTRUCTOR_NAMES = frozenset({"__init__", "constructor"})


def has_outline_query(language: str) -> bool:
    return (_QUERIES_DIR / f"{language}_outline.scm").exists()


def _load_query(language: str, query_type: str) -> Query:
    query_path = _QUERIES_DIR / f"{language}_{query_type}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, language)), query_text)


class _ColumnMapper:
    """Translate tree-sitter byte columns into string character offsets."""

    def __init__(self, source_bytes: bytes) -> None:
        self._lines = source_bytes.split(b"\n")

    def position(self, point: tuple[int, int]) -> Position:
        row, column = point
        if row < len(self._lines):
            column = len(self._lines[row][:column].decode("utf-8", errors="ignore"))
        return Position(line=row, character=column)

    def range(self, node: Node) -> Range:
        return Range(start=self.position(node.start_point), end=self.position(node.end_point))


def _is_class_member(node: Node) -> bool:
    parent = _outer_definition(node).parent
    if parent is None or parent.type not in {"block", "class_body"}:
        return False
    return parent.parent is not None and parent.parent.type in {"class_definition", "class_declaration"}


def _outer_definition(node: Node) -> Node:
    """The ``decorated_definition`` wrapping ``node``, so spans start at the first decorator."""
    parent = node.parent
    if parent is not None and parent.type == "decorated_definition":
        return parent
    return node


def _resolve_kind(kind: SymbolKind, node: Node, name: str) -> SymbolKind:
    if kind is SymbolKind.FUNCTION and _is_class_member(node):
        kind = SymbolKind.METHOD
    if kind is SymbolKind.METHOD and name in _CONSTRUCTOR_NAMES:
        return SymbolKind.CONSTRUCTOR
    return kind


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _receiver_type(node: Node, source_bytes: bytes) -> str | None:
    """Type name of a Go method receiver, e.g. ``Server`` for ``func (s *Server[T]) Run()``."""
    receiver = node.child_by_field_name("receiver")
    if receiver is None:
        return None
    stack = [receiver]
    while stack:
        current = stack.pop()
        if current.type == "type_identifier":
            return _node_text(current, source_bytes)
        stack.extend(reversed(current.children))
    return None


def extract_outline(source: str, language: str) -> list[OutlineNode]:
    """Parse ``source`` and return its named constructs nested by containment."""
    source_bytes = source.encode("utf-8")
    parser = get_parser(cast(SupportedLanguage, language))
    tree = parser.parse(source_bytes)
    query = _load_query(language, "outline")
    columns = _ColumnMapper(source_bytes)

    nodes: list[OutlineNode] = []
    cursor = QueryCursor(query)
    for _, captures in cursor.matches(tree.root_node):
        definition_key = next((key for key in captures if key in _CAPTURE_KINDS), None)
        name_nodes = captures.get("name", [])
        if definition_key is None or not name_nodes:
            continue

        definition = captures[definition_key][0]
        name_node = name_nodes[0]
        name = _node_text(name_node, source_bytes)
        kind = _resolve_kind(_CAPTURE_KINDS[definition_key], definition, name)
        receiver = _receiver_type(definition, source_bytes)
        nodes.append(
            OutlineNode(
                name=f"{receiver}.{name}" if receiver else name,
                kind=kind,
                span=columns.range(_outer_definition(definition)),
                anchor=columns.range(name_node),
                detail=receiver or "",
            )
        )

    logger.debug("Extracted %d outline nodes (%s)", len(nodes), language)
    return nest_nodes(nodes)


class TreeSitterOutlineProvider:
    """Outline provider backed by tree-sitter grammars. Implements ``OutlineProvider``."""

    async def get_outline(self, document: TextDocument) -> list[OutlineNode] | None:
        if not has_outline_query(document.language):
            logger.debug("No outline query for language %s", document.language)
            return None
        return extract_outline(document.text, document.language)
