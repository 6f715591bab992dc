"""Transform engine tying selection inference, transforms, and write-back."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..core.ranges import Selection
from ..editor.protocol import Editor
from ..services.settings import FormatSettings
from .commands import Command
from .selection import ResolvedSpan, recompute_selection, resolve_selection
from .transforms import transform_text

_LOGGER = logging.getLogger(__name__)

SettingsProvider = Callable[[], FormatSettings]


@dataclass(slots=True, frozen=True)
class TransformOutcome:
    """Result of a single command invocation."""

    command: Command
    span: ResolvedSpan
    original_text: str
    new_text: str
    selection: Selection

    @property
    def changed(self) -> bool:
        return self.new_text != self.original_text


class TransformEngine:
    """Runs formatting commands against an :class:`Editor`.

    The engine keeps no document state between calls; the editor owns the
    text and selection, and settings are read fresh for every invocation.
    """

    def __init__(self, settings: FormatSettings | SettingsProvider | None = None) -> None:
        if settings is None:
            settings = FormatSettings()
        if isinstance(settings, FormatSettings):
            fixed = settings
            self._settings_provider: SettingsProvider = lambda: fixed
        else:
            self._settings_provider = settings

    @property
    def settings(self) -> FormatSettings:
        return self._settings_provider()

    def apply(self, command: Command | str, editor: Editor | None) -> TransformOutcome | None:
        """Transform the effective span of ``editor`` with ``command``.

        Returns ``None`` without side effects when there is no active editor.
        """

        if editor is None:
            _LOGGER.debug("No active editor; ignoring %s", command)
            return None
        command = Command.parse(command)
        settings = self._settings_provider()

        span = resolve_selection(command, editor)
        editor.set_selection(span.selection.anchor, span.selection.head)

        new_text = transform_text(command, span.text, settings)
        if new_text != span.text:
            editor.replace_selection(new_text)
        selection = recompute_selection(
            command,
            editor,
            start_offset=span.start_offset,
            new_text=new_text,
        )
        _LOGGER.debug(
            "Applied %s to %d chars (changed=%s)",
            command.value,
            span.length,
            new_text != span.text,
        )
        return TransformOutcome(
            command=command,
            span=span,
            original_text=span.text,
            new_text=new_text,
            selection=selection,
        )

    def apply_to_document(self, command: Command | str, editor: Editor | None) -> bool:
        """Transform the whole document text, keeping the caret in bounds.

        Returns ``True`` when the document changed.
        """

        if editor is None:
            _LOGGER.debug("No active editor; ignoring %s", command)
            return False
        command = Command.parse(command)
        content = editor.get_value()
        converted = transform_text(command, content, self._settings_provider())
        if converted == content:
            return False
        caret = editor.position_to_offset(editor.get_cursor("head"))
        editor.set_value(converted)
        editor.set_selection(editor.offset_to_position(min(caret, len(converted))))
        _LOGGER.debug("Applied %s to whole document (%d chars)", command.value, len(content))
        return True

    def run(self, command: Command | str, editor: Editor | None) -> None:
        """Palette entry point: whole-document commands use the full text."""

        command = Command.parse(command)
        if command.info.whole_document:
            self.apply_to_document(command, editor)
        else:
            self.apply(command, editor)


__all__ = ["SettingsProvider", "TransformEngine", "TransformOutcome"]
