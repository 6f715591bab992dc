"""Palette entries binding each formatting command to the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from ..editor.protocol import Editor
from ..format.commands import COMMAND_INFO, Command
from ..format.engine import TransformEngine

EditorProvider = Callable[[], Editor | None]


@dataclass(slots=True)
class PaletteCommand:
    """Lightweight descriptor for palette entries."""

    command_id: str
    label: str
    command: Command
    callback: Callable[[], None]

    def matches(self, query: str) -> bool:
        if not query:
            return True
        haystack = " ".join((self.label, self.command_id, self.command.value)).casefold()
        return all(token in haystack for token in query.casefold().split())

    def __call__(self) -> None:
        self.callback()


def build_palette_commands(
    engine: TransformEngine,
    editor_provider: EditorProvider,
    *,
    exclude: Iterable[Command | str] | None = None,
) -> list[PaletteCommand]:
    """Create one no-argument entry per command.

    ``editor_provider`` is consulted on every invocation so the entry acts on
    whatever editor is active at that moment (or does nothing without one).
    """

    excluded = {Command.parse(item) for item in (exclude or [])}
    entries: list[PaletteCommand] = []
    for command, info in COMMAND_INFO.items():
        if command in excluded:
            continue
        entries.append(
            PaletteCommand(
                command_id=info.command_id,
                label=info.label,
                command=command,
                callback=_bind(engine, command, editor_provider),
            )
        )
    entries.sort(key=lambda entry: entry.label.casefold())
    return entries


def _bind(engine: TransformEngine, command: Command, editor_provider: EditorProvider) -> Callable[[], None]:
    def _invoke() -> None:
        engine.run(command, editor_provider())

    return _invoke


__all__ = ["EditorProvider", "PaletteCommand", "build_palette_commands"]
