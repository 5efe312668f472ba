"""Configuration manager for ClassTree CLI using TOML files."""

from __future__ import annotations

import logging
from typing import Any, Dict

import toml

from .config import BASE_DIR, CONFIG_FILE

logger = logging.getLogger(__name__)

SCAN_SECTION = "scan"

# Keys accepted in the ``[scan]`` section
SCAN_KEYS = (
    "default_folder",
    "tag_prefix",
    "import_namespace",
    "logic_extensions",
    "markup_extensions",
    "skip_dirs",
)


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections).

    Returns an empty dict when the file is missing or unreadable.
    """
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, exc)
        return {}


def _save_full_config(config: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    BASE_DIR.mkdir(parents=True, exist_ok=True)
    try:
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            toml.dump(config, f)
        return True
    except OSError as exc:
        logger.error("Could not write config %s: %s", CONFIG_FILE, exc)
        return False


def load_scan_config() -> Dict[str, Any]:
    """Load the ``[scan]`` section, dropping keys ClassTree does not know."""
    section = load_full_config().get(SCAN_SECTION, {})
    if not isinstance(section, dict):
        return {}
    return {k: v for k, v in section.items() if k in SCAN_KEYS}


def save_scan_config(**values: Any) -> bool:
    """Merge *values* into the ``[scan]`` section.

    Other sections of the file are preserved.

    Raises:
        KeyError: if a key is not a recognised scan setting.
    """
    unknown = sorted(set(values) - set(SCAN_KEYS))
    if unknown:
        raise KeyError(f"Unknown scan setting(s): {', '.join(unknown)}")

    config = load_full_config()
    section = dict(config.get(SCAN_SECTION, {}))
    section.update(values)
    config[SCAN_SECTION] = section
    return _save_full_config(config)


def clear_scan_config() -> bool:
    """Remove ``[scan]`` section from config, resetting to defaults."""
    config = load_full_config()
    config.pop(SCAN_SECTION, None)
    return _save_full_config(config)
