"""Regex-driven text formatting commands for document editors."""

from .format import Command, TransformEngine, TransformOutcome
from .services.settings import FormatSettings

__version__ = "0.1.0"

__all__ = ["Command", "FormatSettings", "TransformEngine", "TransformOutcome", "__version__"]
