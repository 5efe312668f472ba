"""Lexical matching rules.

Every rule here is a plain function over file text so a stricter matcher
(token or AST based) can replace one rule without touching the builder.
Matches are approximate: comments and string literals are not excluded.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Pattern

_CLASS_DECL = re.compile(r"\bclass\s+(\w+)")
_PY_CLASS_BASES = re.compile(r"^[ \t]*class\s+(\w+)\s*\(([^)]*)\)", re.MULTILINE)
_UPPER = re.compile(r"[A-Z]")


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@lru_cache(maxsize=256)
def _declaration_pattern(name: str) -> Pattern[str]:
    return re.compile(rf"\bclass\s+{re.escape(name)}\b")


def declares_class(text: str, name: str) -> bool:
    """True if *text* contains ``class <name>`` on token boundaries (case-sensitive)."""
    return _declaration_pattern(name).search(text) is not None


def declared_classes(text: str) -> List[str]:
    """All names following a ``class`` keyword, in text order."""
    return _CLASS_DECL.findall(text)


def markup_name_matches(path: Path, name: str) -> bool:
    """Markup files declare the component named like the file, ignoring case."""
    return path.stem.lower() == name.lower()


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

@lru_cache(maxsize=256)
def _extends_pattern(parent: str) -> Pattern[str]:
    return re.compile(rf"\bclass\s+(\w+)\s+extends\s+{re.escape(parent)}\b")


def extends_matches(text: str, parent: str) -> List[str]:
    """Names of classes declared as ``class X extends <parent>``, in text order."""
    return [m.group(1) for m in _extends_pattern(parent).finditer(text)]


def python_base_matches(text: str, parent: str) -> List[str]:
    """Names of Python classes listing *parent* among their bases.

    ``pkg.Parent`` and ``Parent[T]`` count; keyword arguments such as
    ``metaclass=...`` are ignored.
    """
    found: List[str] = []
    for match in _PY_CLASS_BASES.finditer(text):
        for raw in match.group(2).split(","):
            base = raw.strip()
            if not base or "=" in base:
                continue
            base = re.split(r"[\[\s]", base, maxsplit=1)[0]
            if base.rsplit(".", 1)[-1] == parent:
                found.append(match.group(1))
                break
    return found


def mentions(text: str, name: str) -> bool:
    return name in text


# ---------------------------------------------------------------------------
# Custom tags and component imports
# ---------------------------------------------------------------------------

@lru_cache(maxsize=16)
def _tag_pattern(prefix: str) -> Pattern[str]:
    return re.compile(rf"<{re.escape(prefix)}-([A-Za-z0-9_-]+)")


def tag_opener(prefix: str) -> str:
    return f"<{prefix}-"


def format_tag(prefix: str, ident: str) -> str:
    return f"<{prefix}-{ident}>"


def find_tags(line: str, prefix: str) -> List[str]:
    """Every custom tag opened on *line*, normalised to ``<prefix-ident>``."""
    return [format_tag(prefix, m.group(1)) for m in _tag_pattern(prefix).finditer(line)]


@lru_cache(maxsize=16)
def _import_pattern(namespace: str) -> Pattern[str]:
    ns = re.escape(namespace)
    return re.compile(rf"""\bimport\s+[\w${{}},*\s]+?\s+from\s+['"]{ns}/(\w+)['"]""")


def imported_component(line: str, namespace: str) -> Optional[str]:
    """Component identifier imported from ``'<namespace>/<ident>'`` on *line*, if any."""
    if "import" not in line or f"{namespace}/" not in line:
        return None
    match = _import_pattern(namespace).search(line)
    return match.group(1) if match else None


def kebab_case(ident: str) -> str:
    """``myChildCmp`` -> ``my-child-cmp`` (the tag form of a component folder name).

    Every uppercase letter starts a new segment, so ``myHTMLWidget`` becomes
    ``my-h-t-m-l-widget``.
    """
    kebab = _UPPER.sub(lambda m: "-" + m.group(0).lower(), ident)
    return kebab[1:] if kebab.startswith("-") else kebab
