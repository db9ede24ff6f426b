# mixfft/cli/settings.py
"""Option defaults loaded from / saved to JSON or CSV settings files."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Iterable, Any

SETTINGS_FLAGS = ("--settings", "--save-settings")


def add_settings_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--settings",
        dest="settings_path",
        default=None,
        help="Load option defaults from a settings file (json or csv).",
    )
    parser.add_argument(
        "--save-settings",
        dest="save_settings_path",
        default=None,
        help="Save the options of this run to a settings file (json or csv).",
    )


def split_settings_args(
    argv: Iterable[str],
) -> tuple[list[str], str | None, str | None]:
    """
    Pull ``--settings``/``--save-settings`` out of `argv`.

    They have to be known before the parser runs, since loaded settings
    change the parser's defaults.
    """
    found: dict[str, str | None] = {flag: None for flag in SETTINGS_FLAGS}
    cleaned: list[str] = []

    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        flag, eq, value = arg.partition("=")
        if flag in found:
            if not eq:
                if i + 1 >= len(args):
                    raise SystemExit(f"{flag} requires a path.")
                value = args[i + 1]
                i += 1
            found[flag] = value
        else:
            cleaned.append(arg)
        i += 1

    return cleaned, found["--settings"], found["--save-settings"]


def detect_command(argv: Iterable[str]) -> str | None:
    for arg in argv:
        if not arg.startswith("-"):
            return arg
    return None


def _read_csv(path: Path) -> dict[str, Any]:
    data: dict[str, Any] = {}
    with path.open("r", newline="", encoding="utf-8") as handle:
        for row in csv.reader(handle):
            if not row or not row[0].strip():
                continue
            key = row[0].strip()
            if key == "key":
                continue
            raw = row[1].strip() if len(row) > 1 else ""
            try:
                data[key] = json.loads(raw) if raw else ""
            except json.JSONDecodeError:
                data[key] = raw
    return data


def load_settings(path: Path, command: str | None = None) -> dict[str, Any]:
    """
    Load settings for `command`.

    JSON files may hold one flat object, or one object per subcommand with
    an optional ``"default"`` fallback. CSV files are always flat.
    """
    if not path.exists():
        raise SystemExit(f"Settings file not found: {path}")
    if path.suffix.lower() == ".csv":
        return _read_csv(path)

    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise SystemExit(f"Settings file must be a JSON object: {path}")

    if all(not isinstance(v, dict) for v in data.values()):
        return dict(data)
    if command and isinstance(data.get(command), dict):
        return dict(data[command])
    if isinstance(data.get("default"), dict):
        return dict(data["default"])
    return {}


def save_settings(path: Path, settings: dict[str, Any], command: str | None = None) -> None:
    """Write `settings`; JSON files keep other subcommands' sections."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".csv":
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(["key", "value"])
            for key in sorted(settings):
                writer.writerow([key, json.dumps(settings[key])])
        return

    data: dict[str, Any] = {}
    if command and path.exists():
        with path.open("r", encoding="utf-8") as handle:
            try:
                loaded = json.load(handle)
            except json.JSONDecodeError:
                loaded = {}
        if isinstance(loaded, dict) and any(isinstance(v, dict) for v in loaded.values()):
            data = loaded
    if command:
        data[command] = settings
    else:
        data = settings

    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, sort_keys=True)
        handle.write("\n")


def _option_actions(parser: argparse.ArgumentParser) -> list[argparse.Action]:
    return [a for a in parser._actions if a.option_strings and a.dest != "help"]


def apply_settings_to_parser(parser: argparse.ArgumentParser, settings: dict[str, Any]) -> None:
    for action in _option_actions(parser):
        if action.dest in settings:
            action.default = settings[action.dest]
            action.required = False


def serialize_args(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    exclude: set[str] | None = None,
) -> dict[str, Any]:
    exclude = exclude or set()
    out: dict[str, Any] = {}
    for action in _option_actions(parser):
        if action.dest in exclude:
            continue
        value = getattr(args, action.dest, None)
        out[action.dest] = str(value) if isinstance(value, Path) else value
    return out


def find_subparser(
    parser: argparse.ArgumentParser,
    command: str | None,
) -> argparse.ArgumentParser | None:
    if not command:
        return None
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            return action.choices.get(command)
    return None
