"""Shared pytest fixtures."""

from __future__ import annotations

import os

import pytest

from textformat.editor.document_model import DocumentState

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

_SETTINGS_ENV = (
    "TEXTFORMAT_LOWERCASE_FIRST",
    "TEXTFORMAT_MERGE_NEWLINES",
    "TEXTFORMAT_MERGE_SPACES",
    "TEXTFORMAT_SETTINGS_PATH",
    "TEXTFORMAT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_document():
    """Build a document with the selection given as offsets."""

    def _make(text: str, anchor: int = 0, head: int | None = None) -> DocumentState:
        document = DocumentState(text=text)
        document.select_offsets(anchor, head)
        return document

    return _make
