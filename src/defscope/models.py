from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SymbolKind(IntEnum):
    """Closed set of construct kinds, numbered like LSP ``SymbolKind``."""

    OTHER = 0
    NAMESPACE = 3
    CLASS = 5
    METHOD = 6
    CONSTRUCTOR = 9
    FUNCTION = 12

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def is_function_like(self) -> bool:
        return self in _FUNCTION_KINDS

    @property
    def is_name_segment(self) -> bool:
        return self in _NAME_SEGMENT_KINDS

    @classmethod
    def coerce(cls, value: Any) -> SymbolKind:
        if isinstance(value, SymbolKind):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key.isdigit():
                return cls.coerce(int(key))
            return _KIND_NAMES.get(key, cls.OTHER)
        if isinstance(value, int):
            return _LSP_KINDS.get(value, cls.OTHER)
        return cls.OTHER


_FUNCTION_KINDS = frozenset({SymbolKind.FUNCTION, SymbolKind.METHOD, SymbolKind.CONSTRUCTOR})
_NAME_SEGMENT_KINDS = frozenset({SymbolKind.CLASS, *_FUNCTION_KINDS})

# LSP: Module=2, Namespace=3, Package=4 all act as namespaces here.
_LSP_KINDS = {
    2: SymbolKind.NAMESPACE,
    3: SymbolKind.NAMESPACE,
    4: SymbolKind.NAMESPACE,
    5: SymbolKind.CLASS,
    6: SymbolKind.METHOD,
    9: SymbolKind.CONSTRUCTOR,
    12: SymbolKind.FUNCTION,
}

_KIND_NAMES = {
    "module": SymbolKind.NAMESPACE,
    "namespace": SymbolKind.NAMESPACE,
    "package": SymbolKind.NAMESPACE,
    "class": SymbolKind.CLASS,
    "method": SymbolKind.METHOD,
    "constructor": SymbolKind.CONSTRUCTOR,
    "function": SymbolKind.FUNCTION,
}


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)

    def compare(self, other: Position) -> int:
        if self.line != other.line:
            return self.line - other.line
        return self.character - other.character

    def is_before(self, other: Position) -> bool:
        return self.compare(other) < 0

    def is_after(self, other: Position) -> bool:
        return self.compare(other) > 0


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def of(cls, start_line: int, start_char: int, end_line: int, end_char: int) -> Range:
        return cls(
            start=Position(line=start_line, character=start_char),
            end=Position(line=end_line, character=end_char),
        )

    def contains(self, position: Position) -> bool:
        return not position.is_before(self.start) and not position.is_after(self.end)

    def contains_range(self, other: Range) -> bool:
        return self.contains(other.start) and self.contains(other.end)

    def strictly_contains(self, other: Range) -> bool:
        """Containment where ``self`` is larger on at least one side; equal ranges never nest."""
        if not self.contains_range(other):
            return False
        return self.start.is_before(other.start) or self.end.is_after(other.end)

    def is_narrower_than(self, other: Range) -> bool:
        if self.start.is_after(other.start):
            return True
        if self.start.is_before(other.start):
            return False
        return self.end.is_before(other.end)


class OutlineNode(BaseModel):
    """One named construct; accepts LSP ``DocumentSymbol`` payloads via aliases."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    kind: SymbolKind
    span: Range = Field(alias="range")
    anchor: Range | None = Field(default=None, alias="selectionRange")
    detail: str = ""
    children: list[OutlineNode] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> SymbolKind:
        return SymbolKind.coerce(value)

    @field_validator("detail", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return value or ""

    @field_validator("children", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def definition_line(self) -> int:
        if self.anchor is not None:
            return self.anchor.start.line
        return self.span.start.line


OutlineNode.model_rebuild()  # necessary for recursive types


class Location(BaseModel):
    uri: str = ""
    range: Range


class SymbolInformation(BaseModel):
    """Flat outline record (LSP ``SymbolInformation``)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    kind: SymbolKind
    location: Location
    container_name: str = Field(default="", alias="containerName")

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: Any) -> SymbolKind:
        return SymbolKind.coerce(value)

    @field_validator("container_name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return value or ""


class FunctionMatch(BaseModel):
    node: OutlineNode
    ancestors: list[OutlineNode] = Field(default_factory=list)

    @property
    def chain(self) -> list[OutlineNode]:
        return [*self.ancestors, self.node]


class DefinitionBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start_line: int
    start_char: int = 0
    end_line: int
    end_char: int

    @property
    def range(self) -> Range:
        return Range.of(self.start_line, self.start_char, self.end_line, self.end_char)


class Selection(BaseModel):
    """An editor selection; ``active`` is the caret end and may precede ``anchor``."""

    model_config = ConfigDict(frozen=True)

    anchor: Position
    active: Position

    @classmethod
    def at(cls, line: int, character: int) -> Selection:
        position = Position(line=line, character=character)
        return cls(anchor=position, active=position)

    @classmethod
    def between(cls, start: Position, end: Position) -> Selection:
        return cls(anchor=start, active=end)

    @property
    def start(self) -> Position:
        return self.active if self.active.is_before(self.anchor) else self.anchor

    @property
    def end(self) -> Position:
        return self.anchor if self.active.is_before(self.anchor) else self.active

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    def as_range(self) -> Range:
        return Range(start=self.start, end=self.end)
