"""Tests covering the command-line entry point."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from textformat import app
from textformat.format.commands import Command


def _run(argv: list[str], text: str = "") -> tuple[int, str]:
    stdout = io.StringIO()
    code = app.main(argv, stdin=io.StringIO(text), stdout=stdout)
    return code, stdout.getvalue()


@pytest.fixture
def settings_args(tmp_path: Path) -> list[str]:
    return ["--settings-path", str(tmp_path / "settings.json")]


def test_main_transforms_whole_input_by_default(settings_args: list[str]) -> None:
    code, output = _run(["uppercase", *settings_args], "abc\ndef")

    assert code == 0
    assert output == "ABC\nDEF"


def test_main_with_cursor_targets_one_line(settings_args: list[str]) -> None:
    code, output = _run(["uppercase", "--cursor", "1:0", *settings_args], "a\nb\nc")

    assert code == 0
    assert output == "a\nB\nc"


def test_main_with_offset_selection(settings_args: list[str]) -> None:
    code, output = _run(["text-format-capitalize-word", "--select", "0:5", *settings_args], "hello world")

    assert code == 0
    assert output == "Hello world"


def test_main_applies_setting_overrides(settings_args: list[str]) -> None:
    code, output = _run(
        ["capitalize-word", "--set", "lowercase_first=true", *settings_args],
        "hELLO wORLD",
    )

    assert code == 0
    assert output == "Hello World"


def test_main_whole_document_flag(settings_args: list[str]) -> None:
    code, output = _run(["convert-chinese-punctuation", "--whole-document", *settings_args], "a,b\nc?")

    assert code == 0
    assert output == "a，b\nc？"


def test_dump_settings_reports_effective_values(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    code, output = _run(["--dump-settings", "--settings-path", str(path), "--set", "merge-remove-extra-spaces=off"])

    payload = json.loads(output)
    assert code == 0
    assert payload["path"] == str(path)
    assert payload["settings"] == {
        "lowercase_first": False,
        "merge_remove_extra_newlines": True,
        "merge_remove_extra_spaces": False,
    }


def test_list_prints_every_command() -> None:
    code, output = _run(["--list"])

    assert code == 0
    lines = output.strip().splitlines()
    assert len(lines) == len(Command)
    assert lines[0].startswith("lowercase")


@pytest.mark.parametrize(
    "argv",
    [
        ["--set", "lowercase_first"],
        ["--set", "font=1"],
        ["--set", "lowercase_first=maybe"],
        ["shout"],
        [],
        ["uppercase", "--cursor", "nope"],
        ["uppercase", "--cursor", "9:0"],
    ],
)
def test_main_rejects_bad_input(argv: list[str], settings_args: list[str]) -> None:
    code, _ = _run([*argv, *settings_args], "text")

    assert code == 2


def test_settings_path_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"version": 1, "lowercase_first": True}), encoding="utf-8")
    monkeypatch.setenv("TEXTFORMAT_SETTINGS_PATH", str(path))

    code, output = _run(["capitalize-word"], "hELLO")

    assert code == 0
    assert output == "Hello"
