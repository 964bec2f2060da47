"""Persistent JSON config helpers.

Reads default command-line options from the user config directory. The file
is never written by lazydu. All access is defensive: malformed or missing
config, and values of the wrong type, fall back to built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .size_format import parse_size

APP_NAME = "lazydu"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_BOOL_KEYS: tuple[tuple[str, str], ...] = (
    ("sort", "sort"),
    ("reverse", "reverse"),
    ("list", "list_output"),
    ("machine", "machine"),
    ("files_only", "files_only"),
    ("no_color", "no_color"),
)


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


def _coerce_threshold(value: object) -> int | None:
    """Accept non-negative integers or size strings such as ``"10MB"``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str):
        try:
            return parse_size(value)
        except ValueError:
            return None
    return None


def _coerce_nonnegative_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def load_cli_defaults() -> dict[str, object]:
    """Return argparse defaults derived from config, keyed by ``dest`` name.

    Only keys holding valid values are returned; anything else is dropped so
    the parser's own defaults apply.
    """
    data = load_config()
    defaults: dict[str, object] = {}
    for key, dest in _BOOL_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            defaults[dest] = value

    threshold = _coerce_threshold(data.get("threshold"))
    if threshold is not None:
        defaults["threshold"] = threshold

    depth = _coerce_nonnegative_int(data.get("depth"))
    if depth is not None:
        defaults["depth"] = depth

    jobs = _coerce_nonnegative_int(data.get("jobs"))
    if jobs:
        defaults["jobs"] = jobs

    theme = data.get("theme")
    if isinstance(theme, str) and theme.strip():
        defaults["theme"] = theme.strip()
    return defaults


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "load_cli_defaults",
]
