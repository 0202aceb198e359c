"""Persistent JSON defaults for command-line options.

Stores default depth, output format, exclusions, content limits, sort order,
and syntax style. All access is defensive: malformed or missing config falls
back to built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "srctree"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

OUTPUT_FORMATS = ("markdown", "text")
SORT_KEYS = ("name", "date", "size", "type", "ext")
SORT_DIRECTIONS = ("asc", "desc")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only config directory never
    breaks a run.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _coerce_int(value: object, minimum: int) -> int | None:
    """Accept JSON integers ``>= minimum``; booleans and other types are invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < minimum:
        return None
    return value


def _coerce_choice(value: object, choices: tuple[str, ...]) -> str | None:
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    return normalized if normalized in choices else None


def load_defaults() -> dict[str, object]:
    """Return validated option defaults from the config file.

    Only recognised keys with valid values are returned; everything else is
    dropped so callers can overlay the result onto built-in defaults.
    """
    data = load_config()
    defaults: dict[str, object] = {}

    depth = _coerce_int(data.get("depth"), 0)
    if depth is not None:
        defaults["depth"] = depth
    max_size = _coerce_int(data.get("max_size"), 1)
    if max_size is not None:
        defaults["max_size"] = max_size
    context = _coerce_int(data.get("context"), 0)
    if context is not None:
        defaults["context"] = context

    output_format = _coerce_choice(data.get("format"), OUTPUT_FORMATS)
    if output_format is not None:
        defaults["format"] = output_format
    sort = _coerce_choice(data.get("sort"), SORT_KEYS)
    if sort is not None:
        defaults["sort"] = sort
    direction = _coerce_choice(data.get("direction"), SORT_DIRECTIONS)
    if direction is not None:
        defaults["direction"] = direction

    dirs_first = data.get("dirs_first")
    if isinstance(dirs_first, bool):
        defaults["dirs_first"] = dirs_first

    exclude = data.get("exclude")
    if isinstance(exclude, list):
        names = [item.strip() for item in exclude if isinstance(item, str) and item.strip()]
        if names:
            defaults["exclude"] = names

    style = data.get("style")
    if isinstance(style, str) and style.strip():
        defaults["style"] = style.strip()

    return defaults


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "OUTPUT_FORMATS",
    "SORT_DIRECTIONS",
    "SORT_KEYS",
    "load_config",
    "load_defaults",
    "save_config",
]
