"""Resolution errors.

Every error is raised synchronously and aborts the whole resolution call.
The service layer maps ``code`` onto ``ServiceError.code``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any


def format_path(path: Sequence[str]) -> str:
    """Join path segments with dots, keeping ``[i]`` index segments attached."""
    text = ""
    for segment in path:
        if segment.startswith("[") or not text:
            text += segment
        else:
            text += f".{segment}"
    return text


class DesignTokenError(ValueError):
    """Base class for all token resolution errors."""

    code = "TOKEN_ERROR"

    def detail(self) -> dict[str, Any]:
        """Structured payload for ``ServiceError.detail``."""
        return {}


class InvalidNameError(DesignTokenError):
    """A token or group name violates the naming rules."""

    code = "INVALID_NAME"

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name

    def detail(self) -> dict[str, Any]:
        return {"name": self.name}


class MalformedNodeError(DesignTokenError):
    """A tree entry is neither a token nor a group (not a mapping)."""

    code = "MALFORMED_NODE"

    def __init__(self, message: str, *, path: Sequence[str]) -> None:
        super().__init__(message)
        self.path = list(path)

    def detail(self) -> dict[str, Any]:
        return {"path": format_path(self.path)}


class AliasNotFoundError(DesignTokenError):
    """An alias points at a path that does not exist in the context tree."""

    code = "ALIAS_NOT_FOUND"

    def __init__(
        self,
        alias: str,
        context: Mapping[str, Any],
        *,
        origin: Sequence[str] = (),
    ) -> None:
        self.alias = alias
        self.context = context
        self.origin = list(origin)
        where = f" (referenced from {format_path(self.origin)!r})" if self.origin else ""
        dump = json.dumps(context, indent=2, default=str)
        super().__init__(f'Alias "{alias}" not found{where} in context: {dump}')

    def detail(self) -> dict[str, Any]:
        return {"alias": self.alias, "origin": format_path(self.origin)}


class AliasCycleError(DesignTokenError):
    """An alias chain refers back to a path it is already resolving."""

    code = "ALIAS_CYCLE"

    def __init__(self, alias: str, chain: Sequence[str]) -> None:
        self.alias = alias
        self.chain = list(chain)
        loop = " -> ".join([*self.chain, alias])
        super().__init__(f'Circular alias "{alias}": {loop}')

    def detail(self) -> dict[str, Any]:
        return {"alias": self.alias, "chain": self.chain}


class TypeMismatchError(DesignTokenError):
    """A declared type conflicts with the type of the aliased token."""

    code = "TYPE_MISMATCH"

    def __init__(self, declared: str, aliased: str, path: Sequence[str]) -> None:
        self.declared = declared
        self.aliased = aliased
        self.path = list(path)
        super().__init__(f'Type mismatch: {declared} !== {aliased} at path "{format_path(path)}"')

    def detail(self) -> dict[str, Any]:
        return {
            "declared": self.declared,
            "aliased": self.aliased,
            "path": format_path(self.path),
        }


class InvalidValueError(DesignTokenError):
    """A raw ``$value`` is not well formed for its type."""

    code = "INVALID_VALUE"

    def __init__(
        self,
        message: str,
        *,
        token_type: str,
        path: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.token_type = token_type
        self.path = list(path)

    def detail(self) -> dict[str, Any]:
        return {"type": self.token_type, "path": format_path(self.path)}
