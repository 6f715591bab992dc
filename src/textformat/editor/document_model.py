"""In-memory document used as a headless editor.

``DocumentState`` satisfies :class:`~textformat.editor.protocol.Editor` so the
engine, the CLI, and the test-suite can run without a GUI toolkit. Position
handling follows the usual code-editor conventions: out-of-range lines clip
to the end of the document, columns clip to the line length, and replacing
the selection leaves a caret after the inserted text.
"""

from __future__ import annotations

import bisect
import hashlib
from dataclasses import dataclass, field

from ..core.ranges import Position
from .protocol import CursorSide, EditorSelection


def _hash_text(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def _compute_line_starts(text: str) -> list[int]:
    starts = [0]
    index = text.find("\n")
    while index != -1:
        starts.append(index + 1)
        index = text.find("\n", index + 1)
    return starts


@dataclass(slots=True)
class DocumentState:
    """Text buffer plus anchor/head offsets."""

    text: str = ""
    anchor: int = 0
    head: int = 0
    dirty: bool = False
    version_id: int = 1
    content_hash: str = field(default_factory=str)
    _line_starts: list[int] = field(init=False, repr=False, default_factory=list)

    def __post_init__(self) -> None:
        if not self.content_hash:
            self.content_hash = _hash_text(self.text)
        self._line_starts = _compute_line_starts(self.text)
        self.anchor = self._clamp(self.anchor)
        self.head = self._clamp(self.head)

    # ------------------------------------------------------------------
    # Editor protocol
    # ------------------------------------------------------------------
    def get_selection(self) -> EditorSelection:
        start, end = self.selection_span()
        return EditorSelection(
            text=self.text[start:end],
            start=self.offset_to_position(start),
            end=self.offset_to_position(end),
        )

    def get_cursor(self, which: CursorSide = "head") -> Position:
        start, end = self.selection_span()
        offsets = {"from": start, "to": end, "head": self.head, "anchor": self.anchor}
        try:
            offset = offsets[which]
        except KeyError:
            raise ValueError(f"Unknown cursor side: {which!r}") from None
        return self.offset_to_position(offset)

    def position_to_offset(self, position: Position) -> int:
        if position.line >= len(self._line_starts):
            return len(self.text)
        start = self._line_starts[position.line]
        return start + min(position.column, self._line_length(position.line))

    def offset_to_position(self, offset: int) -> Position:
        offset = self._clamp(offset)
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def last_line_index(self) -> int:
        return len(self._line_starts) - 1

    def set_selection(self, anchor: Position, head: Position | None = None) -> None:
        self.anchor = self.position_to_offset(anchor)
        self.head = self.position_to_offset(head if head is not None else anchor)

    def replace_selection(self, text: str) -> None:
        start, end = self.selection_span()
        self.update_text(self.text[:start] + text + self.text[end:])
        self.anchor = self.head = start + len(text)

    def get_value(self) -> str:
        return self.text

    def set_value(self, text: str) -> None:
        self.update_text(text)
        self.anchor = self._clamp(self.anchor)
        self.head = self._clamp(self.head)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def update_text(self, new_text: str) -> None:
        """Update the document text and mark it dirty."""

        self.text = new_text
        self._line_starts = _compute_line_starts(new_text)
        self.dirty = True
        self.version_id += 1
        self.content_hash = _hash_text(new_text)

    def selection_span(self) -> tuple[int, int]:
        """Return the selection as ordered ``(start, end)`` offsets."""

        return (min(self.anchor, self.head), max(self.anchor, self.head))

    def select_offsets(self, anchor: int, head: int | None = None) -> None:
        self.anchor = self._clamp(anchor)
        self.head = self._clamp(anchor if head is None else head)

    def _line_length(self, line: int) -> int:
        start = self._line_starts[line]
        if line + 1 < len(self._line_starts):
            return self._line_starts[line + 1] - 1 - start
        return len(self.text) - start

    def _clamp(self, offset: int) -> int:
        return max(0, min(int(offset), len(self.text)))


__all__ = ["DocumentState"]
