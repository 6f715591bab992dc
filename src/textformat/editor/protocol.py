"""Protocol describing the host editor consumed by the transform engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

from ..core.ranges import Position

CursorSide = Literal["from", "to", "head", "anchor"]


@dataclass(slots=True, frozen=True)
class EditorSelection:
    """Snapshot of the selected text and its ordered endpoints."""

    text: str
    start: Position
    end: Position

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@runtime_checkable
class Editor(Protocol):
    """Minimal editor surface the engine needs.

    The engine never caches document state; every read goes through these
    methods so the host stays the single owner of text and selection.
    """

    def get_selection(self) -> EditorSelection:
        ...

    def get_cursor(self, which: CursorSide = "head") -> Position:
        ...

    def position_to_offset(self, position: Position) -> int:
        ...

    def offset_to_position(self, offset: int) -> Position:
        ...

    def last_line_index(self) -> int:
        ...

    def set_selection(self, anchor: Position, head: Position | None = None) -> None:
        ...

    def replace_selection(self, text: str) -> None:
        ...

    def get_value(self) -> str:
        ...

    def set_value(self, text: str) -> None:
        ...


__all__ = ["CursorSide", "Editor", "EditorSelection"]
