"""Token types, node kinds, and reserved keys.

Token types follow the design token format: a set of design-specific
types plus the plain JSON types used when nothing else is declared.
"""

from __future__ import annotations

from enum import StrEnum


class TokenType(StrEnum):
    """Supported ``$type`` values."""

    COLOR = "color"
    DIMENSION = "dimension"
    FONT_FAMILY = "fontFamily"
    FONT_WEIGHT = "fontWeight"
    DURATION = "duration"
    CUBIC_BEZIER = "cubicBezier"
    NUMBER = "number"
    STROKE_STYLE = "strokeStyle"
    BORDER = "border"
    TRANSITION = "transition"
    SHADOW = "shadow"
    GRADIENT = "gradient"
    TYPOGRAPHY = "typography"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"


class NodeKind(StrEnum):
    """Values published under the ``_kind`` metadata key."""

    TOKEN = "token"
    GROUP = "group"
    ALIAS = "alias"


# --- Reserved keys ---

RESERVED_PREFIX = "$"

TYPE_KEY = "$type"
VALUE_KEY = "$value"
DESCRIPTION_KEY = "$description"
EXTENSIONS_KEY = "$extensions"

KIND_KEY = "_kind"
PATH_KEY = "_path"
NAME_KEY = "_name"

METADATA_KEYS: frozenset[str] = frozenset({KIND_KEY, PATH_KEY, NAME_KEY})
