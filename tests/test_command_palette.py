"""Command palette helper tests."""

from __future__ import annotations

from textformat.editor.document_model import DocumentState
from textformat.format.commands import COMMAND_INFO, Command
from textformat.format.engine import TransformEngine
from textformat.ui.command_palette import PaletteCommand, build_palette_commands


def test_build_palette_commands_creates_one_entry_per_command() -> None:
    entries = build_palette_commands(TransformEngine(), lambda: None)

    assert {entry.command for entry in entries} == set(Command)
    assert {entry.command_id for entry in entries} == {info.command_id for info in COMMAND_INFO.values()}
    labels = [entry.label for entry in entries]
    assert labels == sorted(labels, key=str.casefold)


def test_build_palette_commands_excludes_commands() -> None:
    entries = build_palette_commands(
        TransformEngine(),
        lambda: None,
        exclude=(Command.SPLIT_BY_BLANK, "text-format-upper"),
    )

    commands = {entry.command for entry in entries}
    assert Command.SPLIT_BY_BLANK not in commands
    assert Command.UPPERCASE not in commands
    assert len(entries) == len(Command) - 2


def test_palette_command_matches_all_tokens() -> None:
    command = PaletteCommand(
        command_id="text-format-ordered-list",
        label="Format ordered list",
        command=Command.FORMAT_ORDERED_LIST,
        callback=lambda: None,
    )

    assert command.matches("") is True
    assert command.matches("ordered LIST") is True
    assert command.matches("format text-format") is True
    assert command.matches("bullet") is False


def test_palette_entry_runs_against_active_editor() -> None:
    document = DocumentState(text="one two\nthree")
    active = {"editor": document}
    entries = {
        entry.command: entry
        for entry in build_palette_commands(TransformEngine(), lambda: active["editor"])
    }

    entries[Command.SPLIT_BY_BLANK]()
    assert document.text == "one\ntwo\nthree"

    active["editor"] = None
    entries[Command.UPPERCASE]()
    assert document.text == "one\ntwo\nthree"


def test_punctuation_entry_converts_whole_file() -> None:
    document = DocumentState(text="a,b\nc,d")
    entries = {
        entry.command: entry
        for entry in build_palette_commands(TransformEngine(), lambda: document)
    }

    entries[Command.CONVERT_CHINESE_PUNCTUATION]()

    assert document.text == "a，b\nc，d"
