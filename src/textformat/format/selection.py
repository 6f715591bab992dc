"""Selection inference before a transform and caret bookkeeping after it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.ranges import Position, Selection
from ..editor.protocol import Editor
from .commands import Command

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ResolvedSpan:
    """Text span a command will operate on."""

    selection: Selection
    start_offset: int
    end_offset: int
    text: str

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset


def resolve_selection(command: Command, editor: Editor) -> ResolvedSpan:
    """Decide which span ``command`` acts on without touching the document.

    An explicit selection is used as-is, except for block commands, which
    always widen to whole lines. A bare caret widens to its line, including
    the trailing newline when the line is not the last one.
    """

    current = editor.get_selection()
    last_line = editor.last_line_index()
    for endpoint in (current.start, current.end):
        if endpoint.line > last_line:
            raise ValueError(
                f"Cursor line {endpoint.line} is outside the document (last line {last_line})"
            )

    if command.is_block or current.is_empty:
        start = current.start.line_start()
        end = _line_end_boundary(editor, current.end.line, last_line)
    else:
        start, end = current.start, current.end

    start_offset = editor.position_to_offset(start)
    end_offset = editor.position_to_offset(end)
    if start == current.start and end == current.end:
        text = current.text
    else:
        text = editor.get_value()[start_offset:end_offset]
    _LOGGER.debug(
        "Resolved %s span to offsets [%d, %d) (explicit=%s)",
        command.value,
        start_offset,
        end_offset,
        not current.is_empty,
    )
    return ResolvedSpan(
        selection=Selection(start, end),
        start_offset=start_offset,
        end_offset=end_offset,
        text=text,
    )


def recompute_selection(
    command: Command,
    editor: Editor,
    *,
    start_offset: int,
    new_text: str,
) -> Selection:
    """Select the span that was just written back.

    ``start_offset`` is the "from" offset captured before the replacement.
    Merging paragraphs can change the line count unpredictably, so it
    anchors at that offset and extends to the editor's current head; every
    other command selects ``len(new_text)`` characters ending at the "to"
    cursor.
    """

    if command is Command.MERGE_PARAGRAPH:
        anchor = editor.offset_to_position(start_offset)
        head = editor.get_cursor("head")
    else:
        end_offset = editor.position_to_offset(editor.get_cursor("to"))
        anchor = editor.offset_to_position(max(0, end_offset - len(new_text)))
        head = editor.offset_to_position(end_offset)
    editor.set_selection(anchor, head)
    return Selection(anchor, head)


def _line_end_boundary(editor: Editor, line: int, last_line: int) -> Position:
    if line + 1 <= last_line:
        return Position(line + 1, 0)
    return editor.offset_to_position(len(editor.get_value()))


__all__ = ["ResolvedSpan", "recompute_selection", "resolve_selection"]
