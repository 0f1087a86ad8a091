"""Outline provider reading a saved LSP ``textDocument/documentSymbol`` response."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from defscope.core.document import TextDocument
from defscope.models import OutlineNode, SymbolInformation

logger = logging.getLogger(__name__)

# The two LSP result shapes never validate as each other: a flat record needs
# ``location`` and a hierarchical one needs ``range``.
_OUTLINE_RESULT = TypeAdapter(list[SymbolInformation] | list[OutlineNode] | None)


def parse_outline_payload(payload: Any) -> list[OutlineNode] | list[SymbolInformation] | None:
    """Validate already-decoded JSON in either LSP result shape."""
    return _OUTLINE_RESULT.validate_python(payload) or None


def parse_outline_json(raw: str | bytes) -> list[OutlineNode] | list[SymbolInformation] | None:
    """Validate a raw JSON document in either LSP result shape."""
    return _OUTLINE_RESULT.validate_json(raw) or None


class JsonOutlineProvider:
    """Implements ``OutlineProvider`` from a JSON file; the document argument is not consulted."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def get_outline(self, document: TextDocument) -> list[OutlineNode] | list[SymbolInformation] | None:
        logger.debug("Reading outline for %s from %s", document.path or "<buffer>", self._path)
        return parse_outline_json(self._path.read_bytes())
