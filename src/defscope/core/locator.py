from __future__ import annotations

from collections.abc import Sequence

from defscope.models import FunctionMatch, OutlineNode, Position


def find_innermost_function(nodes: Sequence[OutlineNode], position: Position) -> FunctionMatch | None:
    """Return the narrowest function-like node containing ``position`` and its ancestors.

    Every node whose span contains the point is visited, so a function nested
    in a class nested in a function still wins over its outer function.
    ``None`` means there is no function context at the point.
    """
    best: FunctionMatch | None = None

    def visit(node: OutlineNode, ancestors: list[OutlineNode]) -> None:
        nonlocal best
        if not node.span.contains(position):
            return

        if node.kind.is_function_like and (best is None or node.span.is_narrower_than(best.node.span)):
            best = FunctionMatch(node=node, ancestors=ancestors)

        child_ancestors = [*ancestors, node]
        for child in node.children:
            visit(child, child_ancestors)

    for node in nodes:
        visit(node, [])

    return best
