"""Tests for the MCP server tool definitions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest

from defscope.core.config import CopySettings
from defscope.mcp.server import create_mcp_server

PYTHON_SOURCE = "class Outer:\n    @cache\n    def run(self):\n        value = 1\n        return value\n"


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "outer.py"
    path.write_text(PYTHON_SOURCE)
    return path


@pytest.fixture
def call() -> Callable[..., Awaitable[Any]]:
    server = create_mcp_server(CopySettings(template="{text}"))

    async def invoke(name: str, **arguments: Any) -> Any:
        tools = await server.get_tools()
        return await tools[name].fn(**arguments)

    return invoke


class TestMcpServerCreation:
    def test_creates_server(self) -> None:
        server = create_mcp_server(CopySettings())
        assert server is not None
        assert server.name == "defscope"

    @pytest.mark.asyncio
    async def test_server_has_tools(self) -> None:
        server = create_mcp_server(CopySettings())
        tool_names = {t.name for t in (await server.get_tools()).values()}
        assert "copy_selection_with_parents" in tool_names
        assert "function_with_parents" in tool_names
        assert "function_definition" in tool_names
        assert "qualified_name" in tool_names
        assert "outline" in tool_names


class TestMcpTools:
    @pytest.mark.asyncio
    async def test_function_with_parents(self, call, source_file: Path) -> None:
        text = await call("function_with_parents", path=str(source_file), line=4, column=9)
        assert text == "class Outer:\n    @cache\n    def run(self):\n        value = 1\n        return value"

    @pytest.mark.asyncio
    async def test_function_definition(self, call, source_file: Path) -> None:
        text = await call("function_definition", path=str(source_file), line=4, column=9)
        assert text == "class Outer:\n    @cache\n    def run(self):"

    @pytest.mark.asyncio
    async def test_qualified_name(self, call, source_file: Path) -> None:
        assert await call("qualified_name", path=str(source_file), line=5, column=9) == "`Outer.run`"

    @pytest.mark.asyncio
    async def test_copy_selection_with_parents(self, call, source_file: Path) -> None:
        text = await call(
            "copy_selection_with_parents", path=str(source_file), start_line=5, start_column=1, end_line=5, end_column=21
        )
        assert text == "class Outer:\n    def run(self):\n        # ......\n        return value"

    @pytest.mark.asyncio
    async def test_notice_when_no_function(self, call, source_file: Path) -> None:
        assert await call("function_with_parents", path=str(source_file), line=1, column=1) == (
            "Unable to identify the current function"
        )

    @pytest.mark.asyncio
    async def test_outline(self, call, source_file: Path) -> None:
        rows = await call("outline", path=str(source_file))
        assert rows == [
            {"name": "Outer", "kind": "Class", "depth": 0, "start_line": 1, "end_line": 5},
            {"name": "run", "kind": "Method", "depth": 1, "start_line": 2, "end_line": 5},
        ]

    @pytest.mark.asyncio
    async def test_rejects_zero_based_positions(self, call, source_file: Path) -> None:
        with pytest.raises(ValueError, match="one-based"):
            await call("qualified_name", path=str(source_file), line=0, column=0)
