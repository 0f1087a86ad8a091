"""Clipboard writers. Each implements the ``ClipboardWriter`` protocol."""

from __future__ import annotations

import asyncio
import logging

import pyperclip
from rich.console import Console

logger = logging.getLogger(__name__)


class ClipboardUnavailableError(RuntimeError):
    pass


class SystemClipboard:
    """Copy text to the platform clipboard through pyperclip."""

    async def write_text(self, text: str) -> None:
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardUnavailableError(f"Clipboard unavailable: {exc} Use --stdout instead.") from exc
        logger.info("Copied %d characters to the clipboard", len(text))


class ConsoleClipboard:
    """Print the text instead of copying it."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False, soft_wrap=True)

    async def write_text(self, text: str) -> None:
        self._console.print(text, markup=False)


class BufferClipboard:
    """Keep written texts in memory."""

    def __init__(self) -> None:
        self.writes: list[str] = []

    @property
    def last(self) -> str | None:
        return self.writes[-1] if self.writes else None

    async def write_text(self, text: str) -> None:
        self.writes.append(text)
