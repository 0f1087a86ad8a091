"""Shared fixtures and helpers for tests."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from tree_sitter import Language, Parser, Query
from tree_sitter_language_pack import get_language, get_parser

from defscope.clipboard.adapters import BufferClipboard
from defscope.core.config import CopySettings
from defscope.core.document import TextDocument
from defscope.models import OutlineNode, Range, SymbolInformation, SymbolKind

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Outline helpers
# ---------------------------------------------------------------------------


class StaticOutlineProvider:
    """Outline provider returning a fixed result, or raising a fixed error."""

    def __init__(
        self,
        symbols: Sequence[OutlineNode] | Sequence[SymbolInformation] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.symbols = symbols
        self.error = error
        self.calls = 0

    async def get_outline(self, document: TextDocument) -> Sequence[OutlineNode] | Sequence[SymbolInformation] | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.symbols


NodeFactory = Callable[..., OutlineNode]


def _make_node(
    name: str,
    kind: SymbolKind,
    span: tuple[int, int, int, int],
    anchor: tuple[int, int, int, int] | None = None,
    children: list[OutlineNode] | None = None,
) -> OutlineNode:
    return OutlineNode(
        name=name,
        kind=kind,
        span=Range.of(*span),
        anchor=Range.of(*anchor) if anchor is not None else None,
        children=children or [],
    )


@pytest.fixture
def make_node() -> NodeFactory:
    """Return a factory building outline nodes from ``(line, char, line, char)`` tuples."""
    return _make_node


@pytest.fixture
def static_provider() -> type[StaticOutlineProvider]:
    return StaticOutlineProvider


@pytest.fixture
def clipboard() -> BufferClipboard:
    return BufferClipboard()


@pytest.fixture
def text_settings() -> CopySettings:
    """Settings whose template yields the composed text alone."""
    return CopySettings(template="{text}")


# ---------------------------------------------------------------------------
# Tree-sitter fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def queries_dir() -> Path:
    """Return the path to the queries directory."""
    return Path(__file__).parent.parent / "src" / "defscope" / "queries"


@pytest.fixture
def python_parser() -> Parser:
    """Return a tree-sitter parser for Python."""
    return get_parser("python")


@pytest.fixture
def python_language() -> Language:
    """Return the tree-sitter Python language."""
    return get_language("python")


@pytest.fixture
def python_outline_query(queries_dir: Path, python_language: Language) -> Query:
    """Load the Python outline query."""
    query_text = (queries_dir / "python_outline.scm").read_text()
    return Query(python_language, query_text)
