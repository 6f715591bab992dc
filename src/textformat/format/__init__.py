"""Formatting commands, transforms, and the engine that applies them."""

from .commands import BLOCK_COMMANDS, COMMAND_INFO, Command, CommandInfo
from .engine import TransformEngine, TransformOutcome
from .selection import ResolvedSpan, recompute_selection, resolve_selection
from .transforms import transform_text

__all__ = [
    "BLOCK_COMMANDS",
    "COMMAND_INFO",
    "Command",
    "CommandInfo",
    "ResolvedSpan",
    "TransformEngine",
    "TransformOutcome",
    "recompute_selection",
    "resolve_selection",
    "transform_text",
]
