"""Core domain types shared by the editor adapters and the transform engine."""

from .ranges import Position, Selection

__all__ = ["Position", "Selection"]
