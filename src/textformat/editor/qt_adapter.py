"""Adapter exposing a PySide6 ``QPlainTextEdit`` through the editor protocol.

Lines map to ``QTextBlock`` objects, so the adapter assumes the widget holds
plain text (one block per line). Qt counts positions in UTF-16 code units
while the rest of the package slices Python strings by code point; offsets
are converted here so a character outside the BMP counts as one.
"""

from __future__ import annotations

import logging

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit

from ..core.ranges import Position
from .protocol import CursorSide, EditorSelection

_LOGGER = logging.getLogger(__name__)


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _code_points_before(text: str, units: int) -> int:
    """Count the code points in the first ``units`` UTF-16 units of ``text``."""

    # A position between two halves of a surrogate pair rounds down.
    prefix = text.encode("utf-16-le")[: 2 * max(0, units)]
    return len(prefix.decode("utf-16-le", errors="ignore"))


class QtEditorAdapter:
    """Wrap a ``QPlainTextEdit`` so the transform engine can drive it."""

    def __init__(self, widget: QPlainTextEdit) -> None:
        self._widget = widget

    @property
    def widget(self) -> QPlainTextEdit:
        return self._widget

    def get_selection(self) -> EditorSelection:
        cursor = self._widget.textCursor()
        text = self.get_value()
        start = _code_points_before(text, cursor.selectionStart())
        end = _code_points_before(text, cursor.selectionEnd())
        # selectedText() swaps newlines for U+2029; slice the plain text instead.
        return EditorSelection(
            text=text[start:end],
            start=self.offset_to_position(start),
            end=self.offset_to_position(end),
        )

    def get_cursor(self, which: CursorSide = "head") -> Position:
        cursor = self._widget.textCursor()
        if which == "from":
            units = cursor.selectionStart()
        elif which == "to":
            units = cursor.selectionEnd()
        elif which == "head":
            units = cursor.position()
        elif which == "anchor":
            units = cursor.anchor()
        else:
            raise ValueError(f"Unknown cursor side: {which!r}")
        return self.offset_to_position(_code_points_before(self.get_value(), units))

    def position_to_offset(self, position: Position) -> int:
        text = self.get_value()
        block = self._widget.document().findBlockByNumber(position.line)
        if not block.isValid():
            return len(text)
        line_start = _code_points_before(text, block.position())
        return line_start + min(position.column, len(block.text()))

    def offset_to_position(self, offset: int) -> Position:
        text = self.get_value()
        offset = max(0, min(int(offset), len(text)))
        block = self._widget.document().findBlock(_utf16_length(text[:offset]))
        if not block.isValid():
            block = self._widget.document().lastBlock()
        return Position(block.blockNumber(), offset - _code_points_before(text, block.position()))

    def last_line_index(self) -> int:
        return self._widget.document().blockCount() - 1

    def set_selection(self, anchor: Position, head: Position | None = None) -> None:
        cursor = self._widget.textCursor()
        cursor.setPosition(self._to_units(anchor))
        cursor.setPosition(
            self._to_units(head if head is not None else anchor),
            QTextCursor.MoveMode.KeepAnchor,
        )
        self._widget.setTextCursor(cursor)

    def replace_selection(self, text: str) -> None:
        cursor = self._widget.textCursor()
        cursor.beginEditBlock()
        try:
            cursor.insertText(text)
        finally:
            cursor.endEditBlock()
        self._widget.setTextCursor(cursor)

    def get_value(self) -> str:
        return self._widget.toPlainText()

    def set_value(self, text: str) -> None:
        cursor = self._widget.textCursor()
        cursor.beginEditBlock()
        try:
            cursor.select(QTextCursor.SelectionType.Document)
            cursor.insertText(text)
        finally:
            cursor.endEditBlock()
        _LOGGER.debug("Replaced document contents (%d chars)", len(text))

    def _to_units(self, position: Position) -> int:
        return _utf16_length(self.get_value()[: self.position_to_offset(position)])


__all__ = ["QtEditorAdapter"]
