"""Service layer helpers (settings persistence)."""

from .settings import FormatSettings, SettingsController, SettingsStore

__all__ = ["FormatSettings", "SettingsController", "SettingsStore"]
