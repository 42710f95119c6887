"""Token / Group classification.

Each raw tree entry is classified exactly once, up front, into one of
two frozen variants. The resolver dispatches on the variant instead of
re-testing field presence.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from tokenctl.domain.aliases import is_alias
from tokenctl.domain.errors import MalformedNodeError, format_path
from tokenctl.domain.names import validate_name
from tokenctl.domain.types import (
    DESCRIPTION_KEY,
    EXTENSIONS_KEY,
    RESERVED_PREFIX,
    TYPE_KEY,
    VALUE_KEY,
)


@dataclass(frozen=True)
class Token:
    """A leaf node carrying a raw ``$value``."""

    name: str
    value: Any
    type: str | None = None
    description: str | None = None
    extensions: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class Group:
    """A container node; children are the nested mapping entries."""

    name: str
    type: str | None = None
    description: str | None = None
    children: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)


Node = Token | Group


def classify_node(name: str, raw: Any, path: Sequence[str] = ()) -> Node:
    """Validate *name* and classify *raw* as a :class:`Token` or :class:`Group`.

    A mapping is a Token iff it carries a ``$value`` key. Group children are
    the entries whose key has no ``$`` prefix and whose value is a mapping;
    anything else in a group (lists, scalars, ``null``) is ignored.

    Raises:
        InvalidNameError: If *name* breaks the naming rules.
        MalformedNodeError: If *raw* is not a mapping.
    """
    validate_name(name)
    if not isinstance(raw, Mapping):
        location = format_path([*path, name])
        msg = f"Expected a token or group object at {location!r}, got {type(raw).__name__}"
        raise MalformedNodeError(msg, path=[*path, name])

    declared_type = raw.get(TYPE_KEY)
    if declared_type == "":
        declared_type = None
    if declared_type is not None and not isinstance(declared_type, str):
        location = format_path([*path, name])
        msg = f"$type at {location!r} must be a string, got {type(declared_type).__name__}"
        raise MalformedNodeError(msg, path=[*path, name])
    description = raw.get(DESCRIPTION_KEY) or None

    if VALUE_KEY in raw:
        return Token(
            name=name,
            value=raw[VALUE_KEY],
            type=declared_type,
            description=description,
            extensions=raw.get(EXTENSIONS_KEY),
        )

    children = {
        key: child
        for key, child in raw.items()
        if not key.startswith(RESERVED_PREFIX) and isinstance(child, Mapping)
    }
    return Group(name=name, type=declared_type, description=description, children=children)


@dataclass(frozen=True)
class TreeSummary:
    """Node counts for a token tree."""

    tokens: int = 0
    groups: int = 0
    aliases: int = 0


def _count_aliases(value: Any) -> int:
    if is_alias(value):
        return 1
    if isinstance(value, list):
        return sum(_count_aliases(item) for item in value)
    if isinstance(value, Mapping):
        return sum(_count_aliases(item) for item in value.values())
    return 0


def summarize_tree(tree: Mapping[str, Any]) -> TreeSummary:
    """Count tokens, groups, and alias references in a raw token tree."""
    tokens = groups = aliases = 0
    stack: list[tuple[str, Any, tuple[str, ...]]] = [
        (name, raw, ()) for name, raw in reversed(tree.items())
    ]
    while stack:
        name, raw, path = stack.pop()
        node = classify_node(name, raw, path)
        if isinstance(node, Token):
            tokens += 1
            aliases += _count_aliases(node.value)
            continue
        groups += 1
        child_path = (*path, name)
        stack.extend((key, child, child_path) for key, child in reversed(node.children.items()))
    return TreeSummary(tokens=tokens, groups=groups, aliases=aliases)
