"""Token tree resolution.

Three mutually recursive layers:

- :func:`resolve_tokens` walks the tree, classifies each entry, inherits
  group types, validates tokens, and rebuilds the output tree.
- :func:`resolve_object_value` / :func:`resolve_array_value` walk
  composite ``$value`` structures and replace alias leaves.
- :func:`resolve_alias` looks an alias up in the context tree and
  resolves the target through :func:`resolve_tokens` again.

Aliases always resolve against the context (the root tree of the first
call), never against a local subtree. The set of alias paths currently
being resolved is threaded through every call so that a chain which
refers back to itself fails with :class:`AliasCycleError`.

The input tree is never mutated; every output container is new.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tokenctl.domain.aliases import (
    MISSING,
    alias_path,
    inherited_type,
    is_alias,
    lookup_path,
    split_path,
)
from tokenctl.domain.errors import (
    AliasCycleError,
    AliasNotFoundError,
    InvalidNameError,
    InvalidValueError,
    TypeMismatchError,
    format_path,
)
from tokenctl.domain.inference import infer_type
from tokenctl.domain.nodes import Group, Token, classify_node
from tokenctl.domain.options import ResolveOptions
from tokenctl.domain.types import (
    DESCRIPTION_KEY,
    EXTENSIONS_KEY,
    KIND_KEY,
    METADATA_KEYS,
    NAME_KEY,
    PATH_KEY,
    TYPE_KEY,
    VALUE_KEY,
    NodeKind,
)
from tokenctl.domain.values import validate_value

Path = tuple[str, ...]
Chain = tuple[str, ...]


@dataclass(frozen=True)
class AliasResolution:
    """Outcome of resolving one alias.

    ``value`` is what goes into the output tree. ``entry`` is the resolved
    target node, or None when the raw alias string was passed through.
    """

    value: Any
    entry: Mapping[str, Any] | None = None

    @property
    def type(self) -> str | None:
        if isinstance(self.entry, Mapping):
            return self.entry.get(TYPE_KEY)
        return None


# ---------------------------------------------------------------------------
# Alias resolver
# ---------------------------------------------------------------------------


def resolve_alias(
    raw_alias: str,
    options: ResolveOptions | None = None,
    context: Mapping[str, Any] | None = None,
    *,
    origin: Sequence[str] = (),
    chain: Chain = (),
) -> Any:
    """Resolve ``{dotted.path}`` against *context*.

    Returns the raw alias string when alias resolution is disabled, or when
    the target is missing and validation is skipped. Otherwise returns the
    resolved target entry (or its bare ``$value`` when flattening).

    Raises:
        AliasNotFoundError: If the target is missing and validation is on.
        AliasCycleError: If the alias is already being resolved up the stack.
    """
    return _resolve_alias(raw_alias, options or ResolveOptions(), context or {}, origin, chain).value


def _resolve_alias(
    raw_alias: str,
    options: ResolveOptions,
    context: Mapping[str, Any],
    origin: Sequence[str],
    chain: Chain,
) -> AliasResolution:
    if not options.resolve_aliases:
        return AliasResolution(raw_alias)

    path = alias_path(raw_alias)
    target = lookup_path(context, path)
    if target is MISSING:
        if options.skip_validation:
            return AliasResolution(raw_alias)
        raise AliasNotFoundError(path, context, origin=origin)

    if path in chain:
        raise AliasCycleError(path, chain)

    segments = split_path(path)
    name, parent_segments = segments[-1], tuple(segments[:-1])
    resolved = resolve_tokens(
        {name: target},
        options,
        parent_type=inherited_type(context, parent_segments),
        context=context,
        path=parent_segments,
        chain=(*chain, path),
    )
    entry = resolved[name]

    if options.flatten_aliases and VALUE_KEY in entry:
        return AliasResolution(entry[VALUE_KEY], entry)

    if options.publish_metadata:
        entry = {
            **entry,
            KIND_KEY: NodeKind.ALIAS.value,
            NAME_KEY: name,
            PATH_KEY: list(segments),
        }
    return AliasResolution(entry, entry)


# ---------------------------------------------------------------------------
# Composite value resolver
# ---------------------------------------------------------------------------


def _resolve_member(
    item: Any,
    options: ResolveOptions,
    context: Mapping[str, Any],
    path: Path,
    chain: Chain,
) -> Any:
    if is_alias(item):
        return _resolve_alias(item, options, context, path, chain).value
    if isinstance(item, list):
        return resolve_array_value(item, options, context, path=path, chain=chain)
    if isinstance(item, Mapping):
        return resolve_object_value(item, options, context, path=path, chain=chain)
    return item


def resolve_object_value(
    value: Mapping[str, Any],
    options: ResolveOptions | None = None,
    context: Mapping[str, Any] | None = None,
    *,
    path: Path = (),
    chain: Chain = (),
) -> dict[str, Any]:
    """Resolve every member of an object-shaped ``$value``, keeping key order."""
    opts = options or ResolveOptions()
    ctx = context or {}
    return {
        key: _resolve_member(item, opts, ctx, (*path, key), chain) for key, item in value.items()
    }


def resolve_array_value(
    value: Sequence[Any],
    options: ResolveOptions | None = None,
    context: Mapping[str, Any] | None = None,
    *,
    path: Path = (),
    chain: Chain = (),
) -> list[Any]:
    """Resolve every element of an array-shaped ``$value``, keeping order."""
    opts = options or ResolveOptions()
    ctx = context or {}
    return [
        _resolve_member(item, opts, ctx, (*path, f"[{index}]"), chain)
        for index, item in enumerate(value)
    ]


# ---------------------------------------------------------------------------
# Tree resolver
# ---------------------------------------------------------------------------


def resolve_tokens(
    tokens: Mapping[str, Any],
    options: ResolveOptions | None = None,
    *,
    parent_type: str | None = None,
    context: Mapping[str, Any] | None = None,
    path: Path = (),
    chain: Chain = (),
) -> dict[str, Any]:
    """Resolve a token tree into a uniformly shaped output tree.

    Args:
        tokens: The tree (or a single-entry subtree) to resolve.
        options: Resolution switches; all off by default.
        parent_type: Effective ``$type`` of the enclosing group, if any.
        context: Tree that alias paths are looked up in. Defaults to *tokens*.
        path: Segments leading to *tokens*, for metadata and error messages.
        chain: Alias paths currently being resolved (cycle guard).

    Returns:
        A new mapping with one entry per input entry, in input order.
    """
    opts = options or ResolveOptions()
    ctx = tokens if context is None else context

    resolved: dict[str, Any] = {}
    for name, raw in tokens.items():
        node = classify_node(name, raw, path)
        node_path = (*path, name)
        effective_type = node.type or parent_type
        if isinstance(node, Token):
            resolved[name] = _resolve_token(node, effective_type, opts, ctx, node_path, chain)
        else:
            resolved[name] = _resolve_group(node, effective_type, opts, ctx, node_path, chain)
    return resolved


def _resolve_token(
    token: Token,
    token_type: str | None,
    options: ResolveOptions,
    context: Mapping[str, Any],
    path: Path,
    chain: Chain,
) -> dict[str, Any]:
    raw_value = token.value

    if is_alias(raw_value):
        alias = _resolve_alias(raw_value, options, context, path, chain)
        value = alias.value
        aliased_type = alias.type
        if aliased_type is not None:
            if token_type is None:
                token_type = aliased_type
            elif token_type != aliased_type:
                raise TypeMismatchError(token_type, aliased_type, path)
    elif isinstance(raw_value, list):
        value = resolve_array_value(raw_value, options, context, path=path, chain=chain)
    elif isinstance(raw_value, Mapping):
        value = resolve_object_value(raw_value, options, context, path=path, chain=chain)
    else:
        value = raw_value

    if token_type is None:
        token_type = infer_type(raw_value)

    if not options.skip_validation:
        try:
            validate_value(token_type, raw_value)
        except InvalidValueError as exc:
            msg = f"{exc} at path {format_path(path)!r}"
            raise InvalidValueError(msg, token_type=str(token_type), path=path) from exc

    result: dict[str, Any] = {TYPE_KEY: str(token_type), VALUE_KEY: value}
    if token.description:
        result[DESCRIPTION_KEY] = token.description
    if token.extensions is not None:
        result[EXTENSIONS_KEY] = copy.deepcopy(token.extensions)
    if options.publish_metadata:
        result[KIND_KEY] = NodeKind.TOKEN.value
        result[PATH_KEY] = list(path)
    return result


def _resolve_group(
    group: Group,
    group_type: str | None,
    options: ResolveOptions,
    context: Mapping[str, Any],
    path: Path,
    chain: Chain,
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if group_type:
        result[TYPE_KEY] = str(group_type)
    if group.description:
        result[DESCRIPTION_KEY] = group.description
    if options.publish_metadata:
        result[KIND_KEY] = NodeKind.GROUP.value
        result[PATH_KEY] = list(path)

    for key, child in group.children.items():
        if options.publish_metadata and key in METADATA_KEYS:
            msg = f"Name {key!r} at {format_path([*path, key])!r} collides with a metadata key"
            raise InvalidNameError(msg, name=key)
        result.update(
            resolve_tokens(
                {key: child},
                options,
                parent_type=group_type,
                context=context,
                path=path,
                chain=chain,
            )
        )
    return result
