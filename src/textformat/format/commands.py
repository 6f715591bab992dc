"""Formatting commands and their palette metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class Command(str, Enum):
    """Formatting operations exposed to the host's command palette."""

    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    CAPITALIZE_WORD = "capitalize-word"
    CAPITALIZE_SENTENCE = "capitalize-sentence"
    TITLECASE = "titlecase"
    REMOVE_SPACES = "remove-spaces"
    MERGE_PARAGRAPH = "merge-paragraph"
    FORMAT_BULLET_LIST = "format-bullet-list"
    FORMAT_ORDERED_LIST = "format-ordered-list"
    SPLIT_BY_BLANK = "split-by-blank"
    CONVERT_CHINESE_PUNCTUATION = "convert-chinese-punctuation"

    @property
    def is_block(self) -> bool:
        """Return ``True`` for commands that always operate on whole lines."""

        return self in BLOCK_COMMANDS

    @property
    def info(self) -> CommandInfo:
        return COMMAND_INFO[self]

    @classmethod
    def parse(cls, value: "str | Command") -> Command:
        """Resolve a command from its value, enum name, or palette id."""

        if isinstance(value, Command):
            return value
        key = str(value).strip()
        try:
            return cls(key.lower())
        except ValueError:
            pass
        by_name = cls.__members__.get(key.upper().replace("-", "_"))
        if by_name is not None:
            return by_name
        for command, info in COMMAND_INFO.items():
            if info.command_id == key:
                return command
        raise ValueError(f"Unknown formatting command: {value!r}")


@dataclass(slots=True, frozen=True)
class CommandInfo:
    """Stable palette identity for a command."""

    command_id: str
    label: str
    whole_document: bool = False


BLOCK_COMMANDS: frozenset[Command] = frozenset(
    {Command.FORMAT_BULLET_LIST, Command.FORMAT_ORDERED_LIST, Command.SPLIT_BY_BLANK}
)

COMMAND_INFO: Mapping[Command, CommandInfo] = {
    Command.LOWERCASE: CommandInfo("text-format-lower", "Lowercase selected text"),
    Command.UPPERCASE: CommandInfo("text-format-upper", "Uppercase selected text"),
    Command.CAPITALIZE_WORD: CommandInfo(
        "text-format-capitalize-word", "Capitalize all words in selected text"
    ),
    Command.CAPITALIZE_SENTENCE: CommandInfo(
        "text-format-capitalize-sentence",
        "Capitalize only first word of sentence in selected text",
    ),
    Command.TITLECASE: CommandInfo("text-format-titlecase", "Title case selected text"),
    Command.REMOVE_SPACES: CommandInfo(
        "text-format-remove-spaces", "Remove redundant spaces in selection"
    ),
    Command.MERGE_PARAGRAPH: CommandInfo(
        "text-format-merge-line", "Merge broken paragraph(s) in selection"
    ),
    Command.FORMAT_BULLET_LIST: CommandInfo("text-format-bullet-list", "Format bullet list"),
    Command.FORMAT_ORDERED_LIST: CommandInfo("text-format-ordered-list", "Format ordered list"),
    Command.SPLIT_BY_BLANK: CommandInfo("text-format-split-blank", "Split line(s) by blanks"),
    Command.CONVERT_CHINESE_PUNCTUATION: CommandInfo(
        "text-format-chinese-character",
        "Convert to Chinese character of this file (,;:!?)",
        whole_document=True,
    ),
}


__all__ = ["BLOCK_COMMANDS", "COMMAND_INFO", "Command", "CommandInfo"]
