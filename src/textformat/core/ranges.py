"""Structured helpers for representing editor positions and selections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _coerce_index(owner: str, value: Any, label: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{owner} {label} must be an integer") from exc
    if number < 0:
        raise ValueError(f"{owner} {label} must be non-negative (got {number})")
    return number


@dataclass(slots=True, frozen=True, order=True)
class Position:
    """Line/column location inside a document, ordered lexicographically."""

    line: int
    column: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", _coerce_index("Position", self.line, "line"))
        object.__setattr__(self, "column", _coerce_index("Position", self.column, "column"))

    def line_start(self) -> Position:
        """Return the position at column 0 of the same line."""

        return Position(self.line, 0)


@dataclass(slots=True, frozen=True)
class Selection:
    """Anchor/head pair describing the editor selection.

    ``start`` and ``end`` are the lexicographically smaller and larger
    endpoints regardless of the direction the user dragged in.
    """

    anchor: Position
    head: Position

    @property
    def start(self) -> Position:
        return min(self.anchor, self.head)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.head)

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the selection collapses to a caret."""

        return self.anchor == self.head


__all__ = ["Position", "Selection"]
