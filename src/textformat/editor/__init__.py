"""Editor package containing the editor protocol and its adapters."""

from importlib import import_module
from typing import Any

from . import document_model, protocol

__all__ = ["document_model", "protocol"]


def __getattr__(name: str) -> Any:
	if name == "qt_adapter":
		module = import_module(f"{__name__}.{name}")
		globals()[name] = module
		return module
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
