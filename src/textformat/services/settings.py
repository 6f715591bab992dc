"""Settings dataclass and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

__all__ = [
    "FormatSettings",
    "SettingsStore",
    "SettingsController",
]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".textformat"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXTFORMAT_LOWERCASE_FIRST": "lowercase_first",
    "TEXTFORMAT_MERGE_NEWLINES": "merge_remove_extra_newlines",
    "TEXTFORMAT_MERGE_SPACES": "merge_remove_extra_spaces",
}
# Keys written by the original editor plugin's data.json.
_LEGACY_KEYS: Mapping[str, str] = {
    "LowercaseFirst": "lowercase_first",
    "MergeParagraph_Newlines": "merge_remove_extra_newlines",
    "MergeParagraph_Spaces": "merge_remove_extra_spaces",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True, frozen=True)
class FormatSettings:
    """User preferences read by the transform engine."""

    lowercase_first: bool = False
    merge_remove_extra_newlines: bool = True
    merge_remove_extra_spaces: bool = True


class SettingsStore:
    """Persistence adapter for :class:`FormatSettings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> FormatSettings:
        """Load settings from disk, merging persisted values over the defaults."""

        payload = self._read_payload()
        settings = FormatSettings()
        needs_migration = False

        if payload:
            data, migrated = _normalize_payload(payload)
            needs_migration = migrated
            try:
                settings = FormatSettings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = FormatSettings()
            LOGGER.debug("Settings loaded from %s: %s", self._path, asdict(settings))

        version_mismatch = bool(payload) and payload.get("version") != _SETTINGS_VERSION
        if needs_migration or version_mismatch:
            try:
                self.save(settings)
            except OSError as exc:  # pragma: no cover - read-only config dirs
                LOGGER.warning("Failed to migrate settings payload: %s", exc)

        if overrides:
            settings = _apply_overrides(settings, overrides, source="CLI")

        return self._apply_env_overrides(settings)

    def save(self, settings: FormatSettings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload: Dict[str, Any] = asdict(settings)
        payload["version"] = _SETTINGS_VERSION
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain an object; ignoring.", self._path)
            return {}
        return payload

    def _apply_env_overrides(self, settings: FormatSettings) -> FormatSettings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        if overrides:
            settings = _apply_overrides(settings, overrides, source="environment")
        return settings


class SettingsController:
    """Single mutation surface for settings; persists on every change."""

    def __init__(self, store: SettingsStore, settings: FormatSettings | None = None) -> None:
        self._store = store
        self._settings = settings if settings is not None else store.load()
        self._listeners: list[Callable[[FormatSettings], None]] = []

    @property
    def settings(self) -> FormatSettings:
        return self._settings

    def __call__(self) -> FormatSettings:
        return self._settings

    def add_listener(self, listener: Callable[[FormatSettings], None]) -> None:
        self._listeners.append(listener)

    def update(self, **changes: Any) -> FormatSettings:
        """Apply ``changes``, save, and notify listeners."""

        updated = _apply_overrides(self._settings, changes, source="runtime", strict=True)
        if updated == self._settings:
            return self._settings
        self._settings = updated
        self._store.save(updated)
        for listener in list(self._listeners):
            listener(updated)
        return updated


def coerce_bool(value: Any) -> bool:
    """Interpret ``value`` as a boolean toggle."""

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean")


def _normalize_payload(payload: Mapping[str, Any]) -> tuple[Dict[str, Any], bool]:
    allowed = {field.name for field in fields(FormatSettings)}
    data: Dict[str, Any] = {}
    migrated = False
    for key, value in payload.items():
        if key in _LEGACY_KEYS:
            target = _LEGACY_KEYS[key]
            if target not in payload:
                data[target] = value
            migrated = True
            continue
        if key in allowed:
            data[key] = value
    for key, value in list(data.items()):
        try:
            data[key] = coerce_bool(value)
        except ValueError:
            LOGGER.warning("Ignoring non-boolean settings value %s=%r", key, value)
            del data[key]
    if migrated:
        LOGGER.info("Migrating legacy plugin settings keys to the current schema.")
    return data, migrated


def _apply_overrides(
    settings: FormatSettings,
    overrides: Mapping[str, Any],
    *,
    source: str,
    strict: bool = False,
) -> FormatSettings:
    allowed = {field.name for field in fields(FormatSettings)}
    filtered: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in allowed:
            if strict:
                raise ValueError(f"Unknown setting: {key}")
            continue
        if value is None:
            continue
        filtered[key] = coerce_bool(value)
    if filtered:
        LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
        settings = replace(settings, **filtered)
    return settings
