"""Normalize provider outlines into a single containment hierarchy."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from defscope.core.document import TextDocument
from defscope.core.ports.outline import OutlineProvider, OutlineResult
from defscope.models import OutlineNode, Range, SymbolInformation

logger = logging.getLogger(__name__)


def _tree_order_key(span: Range) -> tuple[int, int, int, int]:
    # Equal starts: wider ranges first so parents are visited before children.
    return (span.start.line, span.start.character, -span.end.line, -span.end.character)


def symbol_information_to_node(symbol: SymbolInformation) -> OutlineNode:
    return OutlineNode(
        name=symbol.name,
        kind=symbol.kind,
        span=symbol.location.range,
        anchor=symbol.location.range,
        detail=symbol.container_name,
    )


def nest_nodes(nodes: Sequence[OutlineNode]) -> list[OutlineNode]:
    """Rebuild parent/child ownership for flat nodes from their spans alone."""
    ordered = sorted(nodes, key=lambda node: _tree_order_key(node.span))
    roots: list[OutlineNode] = []
    stack: list[OutlineNode] = []

    for node in ordered:
        while stack and not stack[-1].span.strictly_contains(node.span):
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots


def normalize_outline(symbols: OutlineResult) -> list[OutlineNode]:
    if not symbols:
        return []

    if all(isinstance(symbol, OutlineNode) for symbol in symbols):
        return list(symbols)  # type: ignore[arg-type]

    if all(isinstance(symbol, SymbolInformation) for symbol in symbols):
        return nest_nodes([symbol_information_to_node(symbol) for symbol in symbols])  # type: ignore[arg-type]

    logger.warning("Ignoring outline that mixes hierarchical and flat symbols")
    return []


async def get_document_outline(provider: OutlineProvider, document: TextDocument) -> list[OutlineNode]:
    """Fetch and normalize the outline; provider failures count as an empty outline."""
    try:
        symbols = await provider.get_outline(document)
    except Exception:
        logger.warning("Outline provider failed for %s", document.path or "<buffer>", exc_info=True)
        return []
    return normalize_outline(symbols)


def iter_nodes(nodes: Sequence[OutlineNode], depth: int = 0) -> list[tuple[int, OutlineNode]]:
    """Flatten a hierarchy depth-first as ``(depth, node)`` pairs."""
    flattened: list[tuple[int, OutlineNode]] = []
    for node in nodes:
        flattened.append((depth, node))
        flattened.extend(iter_nodes(node.children, depth + 1))
    return flattened
