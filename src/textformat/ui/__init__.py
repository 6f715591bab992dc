"""Host-facing command surface."""

from .command_palette import PaletteCommand, build_palette_commands

__all__ = ["PaletteCommand", "build_palette_commands"]
