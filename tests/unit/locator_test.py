"""Unit tests for locating the innermost function at a position."""

from __future__ import annotations

from defscope.core.locator import find_innermost_function
from defscope.models import Position, SymbolKind


def _at(line: int, character: int) -> Position:
    return Position(line=line, character=character)


class TestFindInnermostFunction:
    def test_method_inside_class(self, make_node) -> None:
        run = make_node("run", SymbolKind.METHOD, (1, 2, 3, 3))
        outer = make_node("Outer", SymbolKind.CLASS, (0, 0, 4, 1), children=[run])

        match = find_innermost_function([outer], _at(2, 4))

        assert match is not None
        assert match.node.name == "run"
        assert [node.name for node in match.ancestors] == ["Outer"]

    def test_innermost_function_wins(self, make_node) -> None:
        inner = make_node("inner", SymbolKind.FUNCTION, (2, 4, 4, 5))
        run = make_node("run", SymbolKind.METHOD, (1, 2, 6, 3), children=[inner])
        outer = make_node("Outer", SymbolKind.CLASS, (0, 0, 7, 1), children=[run])

        match = find_innermost_function([outer], _at(3, 6))

        assert match is not None
        assert match.node.name == "inner"
        assert [node.name for node in match.chain] == ["Outer", "run", "inner"]

    def test_function_inside_class_inside_function(self, make_node) -> None:
        method = make_node("method", SymbolKind.METHOD, (2, 4, 3, 10))
        local = make_node("Local", SymbolKind.CLASS, (1, 2, 3, 10), children=[method])
        factory = make_node("factory", SymbolKind.FUNCTION, (0, 0, 5, 1), children=[local])

        match = find_innermost_function([factory], _at(3, 2))

        assert match is not None
        assert match.node.name == "method"
        assert [node.name for node in match.ancestors] == ["factory", "Local"]

    def test_position_in_class_body_outside_methods(self, make_node) -> None:
        run = make_node("run", SymbolKind.METHOD, (2, 2, 3, 3))
        outer = make_node("Outer", SymbolKind.CLASS, (0, 0, 4, 1), children=[run])
        assert find_innermost_function([outer], _at(1, 2)) is None

    def test_boundaries_are_inclusive(self, make_node) -> None:
        run = make_node("run", SymbolKind.FUNCTION, (1, 0, 3, 1))
        assert find_innermost_function([run], _at(1, 0)) is not None
        assert find_innermost_function([run], _at(3, 1)) is not None
        assert find_innermost_function([run], _at(3, 2)) is None

    def test_empty_outline(self) -> None:
        assert find_innermost_function([], _at(0, 0)) is None


class TestNarrowestSpanTieBreaks:
    def test_shared_start_prefers_earlier_end(self, make_node) -> None:
        wide = make_node("wide", SymbolKind.FUNCTION, (1, 0, 9, 0))
        narrow = make_node("narrow", SymbolKind.FUNCTION, (1, 0, 5, 0))

        match = find_innermost_function([wide, narrow], _at(3, 0))

        assert match is not None
        assert match.node.name == "narrow"

    def test_shared_end_prefers_later_start(self, make_node) -> None:
        wide = make_node("wide", SymbolKind.FUNCTION, (1, 0, 9, 0))
        narrow = make_node("narrow", SymbolKind.FUNCTION, (4, 0, 9, 0))

        match = find_innermost_function([wide, narrow], _at(6, 0))

        assert match is not None
        assert match.node.name == "narrow"

    def test_narrow_node_visited_first_is_kept(self, make_node) -> None:
        narrow = make_node("narrow", SymbolKind.FUNCTION, (2, 4, 4, 0))
        wide = make_node("wide", SymbolKind.FUNCTION, (1, 0, 9, 0))

        match = find_innermost_function([narrow, wide], _at(3, 0))

        assert match is not None
        assert match.node.name == "narrow"
        assert match.ancestors == []

    def test_identical_spans_keep_first_visited(self, make_node) -> None:
        first = make_node("first", SymbolKind.FUNCTION, (1, 0, 5, 0))
        second = make_node("second", SymbolKind.METHOD, (1, 0, 5, 0))

        match = find_innermost_function([first, second], _at(2, 0))

        assert match is not None
        assert match.node.name == "first"
