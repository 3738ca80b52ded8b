"""Persistent JSON config helpers.

Stores listing defaults: theme, header, size format, time column, sort
order and hidden-file preference. All access is defensive: malformed or
missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

from .columns import SizeFormat
from .fields import TimeType
from .filtering import SortField

logger = logging.getLogger(__name__)

APP_NAME = "lazyls"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "LAZYLS_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def config_path() -> Path:
    """Return the config file location, honoring ``LAZYLS_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_bool(config: dict[str, object], key: str) -> bool:
    """Only explicit booleans count; anything else is ``False``."""
    value = config.get(key)
    return value if isinstance(value, bool) else False


def _load_enum(config: dict[str, object], key: str, enum_type, default):
    value = config.get(key)
    if not isinstance(value, str):
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        return default


def load_theme_name(config: dict[str, object]) -> str | None:
    value = config.get("theme")
    return value if isinstance(value, str) else None


def load_header(config: dict[str, object]) -> bool:
    return _load_bool(config, "header")


def load_show_hidden(config: dict[str, object]) -> bool:
    return _load_bool(config, "show_hidden")


def load_group_directories_first(config: dict[str, object]) -> bool:
    return _load_bool(config, "group_directories_first")


def load_size_format(config: dict[str, object]) -> SizeFormat:
    return _load_enum(config, "size_format", SizeFormat, SizeFormat.DECIMAL_BYTES)


def load_time_type(config: dict[str, object]) -> TimeType:
    return _load_enum(config, "time", TimeType, TimeType.MODIFIED)


def load_sort_field(config: dict[str, object]) -> SortField:
    return _load_enum(config, "sort", SortField, SortField.NAME)


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "config_path",
    "load_config",
    "load_theme_name",
    "load_header",
    "load_show_hidden",
    "load_group_directories_first",
    "load_size_format",
    "load_time_type",
    "load_sort_field",
]
