"""Alias syntax and dotted-path lookup.

An alias is a string of the exact form ``{dotted.path}``. Paths are
looked up against a context tree; the closest declared ``$type`` along
a path is what an aliased token inherits.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Final

from tokenctl.domain.types import TYPE_KEY

_ALIAS_PATTERN = re.compile(r"^\{([^{}]+)\}$")


class _Missing:
    """Sentinel type for absent lookup results (``None`` is a valid JSON value)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def is_alias(value: Any) -> bool:
    """Return True if *value* is an alias reference string."""
    return isinstance(value, str) and _ALIAS_PATTERN.match(value) is not None


def alias_path(raw: str) -> str:
    """Strip the bounding braces from an alias: ``{a.b}`` -> ``a.b``."""
    match = _ALIAS_PATTERN.match(raw)
    if match is None:
        msg = f"Not an alias reference: {raw!r}"
        raise ValueError(msg)
    return match.group(1)


def split_path(path: str) -> list[str]:
    """Split a dotted path into its segments."""
    return path.split(".")


def lookup_path(tree: Any, path: str | Sequence[str]) -> Any:
    """Return the subtree of *tree* at *path*, or :data:`MISSING`.

    Mapping keys are matched exactly; an all-digit segment also indexes
    into a list.
    """
    segments = split_path(path) if isinstance(path, str) else list(path)
    current = tree
    for segment in segments:
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def inherited_type(tree: Mapping[str, Any], segments: Sequence[str]) -> str | None:
    """Return the ``$type`` a child of the group at *segments* would inherit.

    Walks from the root down the path and keeps the innermost declared
    type. Returns None when no group along the path declares one.
    """
    found: str | None = None
    current: Any = tree
    for segment in segments:
        if not isinstance(current, Mapping) or segment not in current:
            break
        current = current[segment]
        if isinstance(current, Mapping) and current.get(TYPE_KEY):
            found = current[TYPE_KEY]
    return found
