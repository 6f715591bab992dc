"""Tests for the settings persistence layer."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from textformat.services.settings import FormatSettings, SettingsController, SettingsStore


def test_load_returns_defaults_when_file_missing(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")

    settings = store.load()

    assert settings == FormatSettings()
    assert settings.merge_remove_extra_newlines is True
    assert settings.merge_remove_extra_spaces is True
    assert settings.lowercase_first is False
    assert not (tmp_path / "settings.json").exists()


def test_save_and_load_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    original = FormatSettings(
        lowercase_first=True,
        merge_remove_extra_newlines=False,
        merge_remove_extra_spaces=True,
    )

    SettingsStore(path).save(original)
    reloaded = SettingsStore(path).load()

    assert reloaded == original
    assert json.loads(path.read_text(encoding="utf-8"))["version"] == 1


def test_persisted_values_merge_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"version": 1, "lowercase_first": True}), encoding="utf-8")

    loaded = SettingsStore(path).load()

    assert loaded == FormatSettings(lowercase_first=True)


def test_legacy_plugin_keys_are_migrated(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text(
        json.dumps({"LowercaseFirst": True, "MergeParagraph_Newlines": False}),
        encoding="utf-8",
    )

    loaded = SettingsStore(path).load()

    assert loaded == FormatSettings(lowercase_first=True, merge_remove_extra_newlines=False)
    rewritten = json.loads(path.read_text(encoding="utf-8"))
    assert "LowercaseFirst" not in rewritten
    assert rewritten["lowercase_first"] is True
    assert rewritten["merge_remove_extra_newlines"] is False


def test_invalid_json_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert SettingsStore(path).load() == FormatSettings()


def test_non_boolean_values_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"version": 1, "lowercase_first": "maybe", "merge_remove_extra_spaces": "off"}),
        encoding="utf-8",
    )

    loaded = SettingsStore(path).load()

    assert loaded.lowercase_first is False
    assert loaded.merge_remove_extra_spaces is False


def test_env_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    SettingsStore(path).save(FormatSettings())
    monkeypatch.setenv("TEXTFORMAT_LOWERCASE_FIRST", "yes")
    monkeypatch.setenv("TEXTFORMAT_MERGE_SPACES", "0")

    overridden = SettingsStore(path).load()

    assert overridden.lowercase_first is True
    assert overridden.merge_remove_extra_spaces is False


def test_load_applies_cli_overrides(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")

    loaded = store.load(overrides={"lowercase_first": "true", "unknown": True})

    assert loaded.lowercase_first is True


def test_settings_are_immutable() -> None:
    settings = FormatSettings()

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.lowercase_first = True  # type: ignore[misc]


def test_controller_persists_every_change(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    controller = SettingsController(SettingsStore(path))
    seen: list[FormatSettings] = []
    controller.add_listener(seen.append)

    updated = controller.update(lowercase_first=True)

    assert updated.lowercase_first is True
    assert controller() is updated
    assert SettingsStore(path).load() == updated
    assert seen == [updated]


def test_controller_skips_save_when_nothing_changes(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    controller = SettingsController(SettingsStore(path))

    controller.update(merge_remove_extra_spaces=True)

    assert not path.exists()


def test_controller_rejects_unknown_settings(tmp_path: Path) -> None:
    controller = SettingsController(SettingsStore(tmp_path / "settings.json"))

    with pytest.raises(ValueError):
        controller.update(font_size=12)
