"""Configuration paths and scan defaults for ClassTree."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Set, Tuple

BASE_DIR = Path(os.environ.get("CLASSTREE_HOME", str(Path.home() / ".classtree"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

LOGIC_EXTENSIONS: Tuple[str, ...] = (".ts", ".js", ".java", ".cs", ".cpp", ".py")
MARKUP_EXTENSIONS: Tuple[str, ...] = (".html",)
DEFAULT_FOLDER = "LWC"
TAG_PREFIX = "c"
IMPORT_NAMESPACE = "c"

SKIP_DIRS: Set[str] = {
    ".venv", "venv", "__pycache__", "node_modules", ".git",
    "site-packages", ".tox", ".pytest_cache", "build", "dist",
    ".mypy_cache", ".ruff_cache", ".sfdx", ".sf", ".classtree",
}


@dataclass(frozen=True)
class ScanSettings:
    """Extension groups and naming conventions used by every scan."""

    logic_extensions: Tuple[str, ...] = LOGIC_EXTENSIONS
    markup_extensions: Tuple[str, ...] = MARKUP_EXTENSIONS
    default_folder: str = DEFAULT_FOLDER
    tag_prefix: str = TAG_PREFIX
    import_namespace: str = IMPORT_NAMESPACE
    skip_dirs: frozenset = field(default_factory=lambda: frozenset(SKIP_DIRS))

    @property
    def all_extensions(self) -> Tuple[str, ...]:
        return self.logic_extensions + self.markup_extensions

    def with_overrides(self, values: Dict[str, Any]) -> "ScanSettings":
        """Return a copy with recognised keys from *values* applied."""
        updates: Dict[str, Any] = {}
        for key in ("logic_extensions", "markup_extensions"):
            if key in values:
                updates[key] = tuple(_normalize_ext(ext) for ext in values[key])
        for key in ("default_folder", "tag_prefix", "import_namespace"):
            if values.get(key):
                updates[key] = str(values[key])
        if "skip_dirs" in values:
            updates["skip_dirs"] = frozenset(values["skip_dirs"])
        return replace(self, **updates)


def _normalize_ext(ext: str) -> str:
    ext = str(ext).strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def load_settings() -> ScanSettings:
    """Build settings from defaults overlaid with the ``[scan]`` TOML section."""
    from .config_manager import load_scan_config

    return ScanSettings().with_overrides(load_scan_config())
