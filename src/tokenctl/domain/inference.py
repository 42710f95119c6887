"""Type inference for tokens without a declared or inherited ``$type``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tokenctl.domain.types import TokenType


def infer_type(value: Any) -> TokenType:
    """Infer the JSON type of a raw token value.

    ``bool`` is checked before ``int`` since it is a subclass of it.
    Unresolved aliases are plain strings and infer as ``string``.
    """
    if isinstance(value, bool):
        return TokenType.BOOLEAN
    if isinstance(value, int | float):
        return TokenType.NUMBER
    if isinstance(value, str):
        return TokenType.STRING
    if value is None:
        return TokenType.NULL
    if isinstance(value, list | tuple):
        return TokenType.ARRAY
    if isinstance(value, Mapping):
        return TokenType.OBJECT
    msg = f"Cannot infer a token type for {type(value).__name__} value {value!r}"
    raise TypeError(msg)
