"""Immutable text snapshot with zero-based line/character access."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from defscope.core.languages import detect_language_from_path, normalize_language
from defscope.models import Position, Range

logger = logging.getLogger(__name__)

PLAIN_TEXT = "plaintext"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class TextDocument:
    text: str
    language: str = PLAIN_TEXT
    path: Path | None = None
    _lines: list[str] = field(init=False, repr=False, compare=False)
    _offsets: list[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lines: list[str] = []
        offsets: list[int] = []
        cursor = 0
        for match in _LINE_BREAK.finditer(self.text):
            offsets.append(cursor)
            lines.append(self.text[cursor : match.start()])
            cursor = match.end()
        offsets.append(cursor)
        lines.append(self.text[cursor:])
        object.__setattr__(self, "_lines", lines)
        object.__setattr__(self, "_offsets", offsets)

    @classmethod
    def from_path(cls, path: str | Path, language: str | None = None) -> TextDocument:
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None

        if language:
            resolved = normalize_language(language)
        else:
            try:
                resolved = detect_language_from_path(file_path)
            except ValueError:
                logger.debug("No known language for %s, treating as plain text", file_path)
                resolved = PLAIN_TEXT
        return cls(text=text, language=resolved, path=file_path)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> str:
        return self._lines[self._clamp_line(line)]

    def offset_at(self, position: Position) -> int:
        line = self._clamp_line(position.line)
        character = min(position.character, len(self._lines[line]))
        return self._offsets[line] + character

    def get_text(self, span: Range | None = None) -> str:
        if span is None:
            return self.text
        return self.text[self.offset_at(span.start) : self.offset_at(span.end)]

    def _clamp_line(self, line: int) -> int:
        return max(0, min(line, len(self._lines) - 1))
