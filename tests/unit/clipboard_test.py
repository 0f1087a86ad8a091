"""Unit tests for clipboard writers."""

from __future__ import annotations

from unittest.mock import patch

import pyperclip
import pytest
from rich.console import Console

from defscope.clipboard.adapters import (
    BufferClipboard,
    ClipboardUnavailableError,
    ConsoleClipboard,
    SystemClipboard,
)


class TestSystemClipboard:
    @pytest.mark.asyncio
    async def test_copies_through_pyperclip(self) -> None:
        with patch("defscope.clipboard.adapters.pyperclip.copy") as copy:
            await SystemClipboard().write_text("héllo")
        copy.assert_called_once_with("héllo")

    @pytest.mark.asyncio
    async def test_missing_mechanism_raises(self) -> None:
        error = pyperclip.PyperclipException("could not find a copy/paste mechanism.")
        with patch("defscope.clipboard.adapters.pyperclip.copy", side_effect=error):
            with pytest.raises(ClipboardUnavailableError, match="--stdout"):
                await SystemClipboard().write_text("text")


@pytest.mark.asyncio
async def test_console_clipboard_prints_text_verbatim() -> None:
    console = Console(record=True, width=80)
    await ConsoleClipboard(console).write_text("[bold]not markup[/bold]")
    assert "[bold]not markup[/bold]" in console.export_text()


@pytest.mark.asyncio
async def test_buffer_clipboard_keeps_writes() -> None:
    clipboard = BufferClipboard()
    assert clipboard.last is None
    await clipboard.write_text("a")
    await clipboard.write_text("b")
    assert clipboard.writes == ["a", "b"]
    assert clipboard.last == "b"
