"""Command-line entry point: format text read from stdin."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Sequence, TextIO

from .core.ranges import Position
from .editor.document_model import DocumentState
from .format.commands import COMMAND_INFO, Command
from .format.engine import TransformEngine
from .services.settings import FormatSettings, SettingsStore, coerce_bool
from .utils import logging as logging_utils

_LOGGER = logging.getLogger(__name__)


def configure_logging(debug: bool = False, *, force: bool = False) -> None:
    """Configure logging for a CLI run."""

    level = logging.DEBUG if debug else logging_utils.level_from_env()
    logging_utils.setup_logging(level, log_to_file=debug, force=force)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def load_settings(
    path: Path | None = None,
    *,
    store: SettingsStore | None = None,
    overrides: Dict[str, Any] | None = None,
) -> FormatSettings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        return active_store.load(overrides=overrides)
    except OSError as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        return FormatSettings()


def build_document(
    text: str,
    *,
    cursor: str | None = None,
    select: str | None = None,
) -> DocumentState:
    """Create the buffer the command runs against.

    Without ``cursor``/``select`` the whole input is selected.
    """

    document = DocumentState(text=text)
    if cursor:
        line, column = _parse_pair(cursor, "--cursor", separator=":")
        if line > document.last_line_index():
            raise ValueError(f"--cursor line {line} is past the last line")
        document.set_selection(Position(line, column))
    elif select:
        start, end = _parse_pair(select, "--select", separator=":")
        document.select_offsets(start, end)
    else:
        document.select_offsets(0, len(text))
    return document


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Entry point invoked by the ``textformat`` console script."""

    args = _parse_cli_args(argv)
    configure_logging(args.debug)
    out = stdout or sys.stdout

    if args.list:
        for command, info in COMMAND_INFO.items():
            print(f"{command.value:<28} {info.command_id:<32} {info.label}", file=out)
        return 0

    settings_path = args.settings_path or os.environ.get("TEXTFORMAT_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    store = SettingsStore(resolved_path)
    try:
        overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        return 2
    settings = load_settings(resolved_path, store=store, overrides=overrides or None)

    if args.dump_settings:
        payload = {"path": str(store.path), "settings": asdict(settings)}
        print(json.dumps(payload, indent=2, sort_keys=True), file=out)
        return 0

    if not args.command:
        print("A command is required (see --list).", file=sys.stderr)
        return 2
    try:
        command = Command.parse(args.command)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    text = (stdin or sys.stdin).read()
    try:
        document = build_document(text, cursor=args.cursor, select=args.select)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    engine = TransformEngine(settings)
    if args.whole_document:
        engine.apply_to_document(command, document)
    else:
        engine.apply(command, document)
    out.write(document.get_value())
    return 0


def _parse_pair(raw: str, flag: str, *, separator: str) -> tuple[int, int]:
    first, sep, second = raw.partition(separator)
    try:
        if not sep:
            raise ValueError
        values = (int(first), int(second))
    except ValueError:
        raise ValueError(f"{flag} expects two integers separated by '{separator}'") from None
    if min(values) < 0:
        raise ValueError(f"{flag} values must be non-negative")
    return values


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    allowed = FormatSettings.__dataclass_fields__  # type: ignore[attr-defined]
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip().replace("-", "_")
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in allowed:
            raise ValueError(f"Unknown setting '{key}'.")
        overrides[key] = coerce_bool(raw_value)
    return overrides


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="textformat",
        description="Apply a formatting command to text read from stdin.",
    )
    parser.add_argument("command", nargs="?", help="Command name or palette id (see --list).")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--cursor",
        metavar="LINE:COL",
        help="Place a caret instead of selecting everything (0-based).",
    )
    target.add_argument(
        "--select",
        metavar="START:END",
        help="Select a character offset range instead of everything.",
    )
    target.add_argument(
        "--whole-document",
        action="store_true",
        help="Transform the entire input regardless of selection.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.textformat/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override a persisted setting for this run (repeatable).",
    )
    parser.add_argument("--dump-settings", action="store_true", help="Print the effective settings and exit.")
    parser.add_argument("--list", action="store_true", help="List available commands and exit.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
