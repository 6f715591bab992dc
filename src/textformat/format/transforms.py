"""Pure text transforms backing each formatting command.

Every function here is total over arbitrary strings (the empty string
included) and performs no I/O. Functions that honour the "lowercase first"
preference take it as a keyword flag; :func:`transform_text` wires the flags
from :class:`~textformat.services.settings.FormatSettings`.
"""

from __future__ import annotations

import re
from typing import Callable, Mapping

from titlecase import titlecase

from ..services.settings import FormatSettings
from .commands import Command

# Latin (ASCII word characters plus Latin-1 / Extended-A/B letters) and Cyrillic.
LETTER_CLASS = "[0-9A-Za-z_\\u00c0-\\u00d6\\u00d8-\\u00f6\\u00f8-\\u024f\\u0400-\\u04ff]"

_WORD_RE = re.compile(LETTER_CLASS + r"\S*")
_SENTENCE_START_RE = re.compile(r"(^|[.!?\n~]\s+)(" + LETTER_CLASS + ")")
_MULTI_SPACE_RE = re.compile(r" {2,}")
_SOFT_BREAK_RE = re.compile(r"(?<!\n)\n(?!\n)")
_EXTRA_NEWLINES_RE = re.compile(r"\n{2,}")
_NEWLINE_RUN_RE = re.compile(r"\n+")
_LINE_SPLIT_RE = re.compile(r"(\r?\n)")
_WORD_SEPARATOR_RE = re.compile(r"[\t ]")
_BULLET_RE = re.compile(r"(?:^|\s+) *• *")
_ORDINAL_RE = re.compile(
    r"(?:^|\s+)"
    r"(?:[^\s\[\]()]+\)|\w+[:;]\w+\)|[0-9]\.)"
    r"[ \t]*"
)
_COLON_RE = re.compile(r"(?<=[^a-zA-Z0-9]):")
_BANG_RE = re.compile(r"!(?!\[)")

_CHINESE_PUNCTUATION: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(","), "，"),
    (re.compile(";"), "；"),
    (_COLON_RE, "："),
    (_BANG_RE, "！"),
    (re.compile(r"\?"), "？"),
)


def lowercase(text: str) -> str:
    return text.lower()


def uppercase(text: str) -> str:
    return text.upper()


def capitalize_words(text: str, *, lowercase_first: bool = False) -> str:
    """Uppercase the first letter of every word."""

    if lowercase_first:
        text = text.lower()
    return _WORD_RE.sub(lambda match: _upper_first(match.group(0)), text)


def capitalize_sentences(text: str, *, lowercase_first: bool = False) -> str:
    """Uppercase the first letter of the text and of every sentence.

    A sentence starts after one of ``. ! ? ~`` or a newline followed by at
    least one whitespace character.
    """

    if lowercase_first:
        text = text.lower()
    return _SENTENCE_START_RE.sub(lambda match: match.group(1) + match.group(2).upper(), text)


def title_case(text: str, *, lowercase_first: bool = False) -> str:
    """Apply English title-case rules line by line.

    Line separators, tabs, and runs of spaces are kept verbatim; the
    ``titlecase`` library handles small words, first/last word
    capitalization, and acronyms.
    """

    if lowercase_first:
        text = text.lower()
    parts = _LINE_SPLIT_RE.split(text)
    return "".join(
        part if not part or _LINE_SPLIT_RE.fullmatch(part) else _title_case_line(part)
        for part in parts
    )


def _title_case_line(line: str) -> str:
    # titlecase() rejoins the words of a line with single spaces.
    result = titlecase(line)
    separators = _WORD_SEPARATOR_RE.findall(line)
    words = result.split(" ")
    if "\t" not in separators or len(words) != len(separators) + 1:
        return result
    return words[0] + "".join(sep + word for sep, word in zip(separators, words[1:]))


def remove_spaces(text: str) -> str:
    return _MULTI_SPACE_RE.sub(" ", text)


def merge_paragraphs(
    text: str,
    *,
    remove_extra_newlines: bool = True,
    remove_extra_spaces: bool = True,
) -> str:
    """Join soft-wrapped lines while keeping blank-line paragraph breaks."""

    merged = _SOFT_BREAK_RE.sub(" ", text)
    if remove_extra_newlines:
        merged = _EXTRA_NEWLINES_RE.sub("\n\n", merged)
    if remove_extra_spaces:
        merged = _MULTI_SPACE_RE.sub(" ", merged)
    return merged


def format_bullet_list(text: str) -> str:
    """Rewrite ``•`` bullets as one ``- `` item per line."""

    replaced = _BULLET_RE.sub("\n- ", text)
    return _normalize_list_breaks(replaced)


def format_ordered_list(text: str) -> str:
    """Renumber ordinal markers sequentially as ``1. ``, ``2. `` ...

    Markers are ``token)``, ``word:word)`` / ``word;word)`` or a single digit
    followed by ``.``, found at the start of the text or after whitespace.
    Each marker starts a new line regardless of its original numbering.
    """

    pieces: list[str] = []
    cursor = 0
    for number, match in enumerate(_ORDINAL_RE.finditer(text), start=1):
        pieces.append(text[cursor : match.start()])
        pieces.append(f"\n{number}. ")
        cursor = match.end()
    pieces.append(text[cursor:])
    return _normalize_list_breaks("".join(pieces))


def split_by_blank(text: str) -> str:
    return text.replace(" ", "\n")


def convert_chinese_punctuation(text: str) -> str:
    """Swap ASCII ``, ; : ! ?`` for their full-width forms.

    Colons directly after an ASCII letter or digit stay ASCII (``http:``,
    ``10:30``), and ``![`` is left alone so image links survive.
    """

    for pattern, replacement in _CHINESE_PUNCTUATION:
        text = pattern.sub(replacement, text)
    return text


def transform_text(command: Command, text: str, settings: FormatSettings | None = None) -> str:
    """Run the transform registered for ``command`` over ``text``."""

    active = settings or FormatSettings()
    return _TRANSFORMS[command](text, active)


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def _normalize_list_breaks(text: str) -> str:
    collapsed = _NEWLINE_RUN_RE.sub("\n", text)
    if collapsed.startswith("\n"):
        collapsed = collapsed[1:]
    return collapsed


_TRANSFORMS: Mapping[Command, Callable[[str, FormatSettings], str]] = {
    Command.LOWERCASE: lambda text, _settings: lowercase(text),
    Command.UPPERCASE: lambda text, _settings: uppercase(text),
    Command.CAPITALIZE_WORD: lambda text, settings: capitalize_words(
        text, lowercase_first=settings.lowercase_first
    ),
    Command.CAPITALIZE_SENTENCE: lambda text, settings: capitalize_sentences(
        text, lowercase_first=settings.lowercase_first
    ),
    Command.TITLECASE: lambda text, settings: title_case(
        text, lowercase_first=settings.lowercase_first
    ),
    Command.REMOVE_SPACES: lambda text, _settings: remove_spaces(text),
    Command.MERGE_PARAGRAPH: lambda text, settings: merge_paragraphs(
        text,
        remove_extra_newlines=settings.merge_remove_extra_newlines,
        remove_extra_spaces=settings.merge_remove_extra_spaces,
    ),
    Command.FORMAT_BULLET_LIST: lambda text, _settings: format_bullet_list(text),
    Command.FORMAT_ORDERED_LIST: lambda text, _settings: format_ordered_list(text),
    Command.SPLIT_BY_BLANK: lambda text, _settings: split_by_blank(text),
    Command.CONVERT_CHINESE_PUNCTUATION: lambda text, _settings: convert_chinese_punctuation(text),
}


__all__ = [
    "LETTER_CLASS",
    "capitalize_sentences",
    "capitalize_words",
    "convert_chinese_punctuation",
    "format_bullet_list",
    "format_ordered_list",
    "lowercase",
    "merge_paragraphs",
    "remove_spaces",
    "split_by_blank",
    "title_case",
    "transform_text",
    "uppercase",
]
