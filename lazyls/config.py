"""Persistent JSON config helpers.

Stores default color, directory-grouping, and width preferences applied
before command-line flags. All access is defensive: malformed or missing
config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazyls"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("config %s not loaded: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_color_default() -> bool | None:
    """Return persisted color preference, or ``None`` when unset/invalid."""
    value = load_config().get("color")
    return value if isinstance(value, bool) else None


def load_dirs_first_default() -> bool:
    """Return persisted directories-first preference (``False`` when unset)."""
    value = load_config().get("dirs_first")
    return value if isinstance(value, bool) else False


def load_width_default() -> int | None:
    """Return persisted terminal width override.

    Booleans, non-integers, and values below 1 are treated as unset.
    """
    value = load_config().get("width")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


__all__ = [
    "CONFIG_PATH",
    "load_config",
    "load_color_default",
    "load_dirs_first_default",
    "load_width_default",
]
