"""Raw value validation per token type.

Validation runs on the raw ``$value`` before aliases are dereferenced,
so every value position (top level or composite member) accepts an
alias string in place of a literal.

Each validator raises :class:`InvalidValueError` on the first problem
it finds. Composite validators delegate to the scalar validators for
their members and prefix the member name to the message.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, NoReturn

from tokenctl.domain.aliases import is_alias
from tokenctl.domain.errors import InvalidValueError
from tokenctl.domain.types import TokenType

Validator = Callable[[Any], None]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")
_DIMENSION = re.compile(r"^-?(\d+(\.\d+)?|\.\d+)(px|rem)$")
_DURATION = re.compile(r"^(\d+(\.\d+)?|\.\d+)ms$")

FONT_WEIGHT_KEYWORDS: frozenset[str] = frozenset(
    {
        "thin",
        "hairline",
        "extra-light",
        "ultra-light",
        "light",
        "normal",
        "regular",
        "book",
        "medium",
        "semi-bold",
        "demi-bold",
        "bold",
        "extra-bold",
        "ultra-bold",
        "black",
        "heavy",
        "extra-black",
        "ultra-black",
    }
)

STROKE_STYLE_KEYWORDS: frozenset[str] = frozenset(
    {"solid", "dashed", "dotted", "double", "groove", "ridge", "outset", "inset"}
)

LINE_CAPS: frozenset[str] = frozenset({"round", "butt", "square"})


def _fail(token_type: str, message: str) -> NoReturn:
    raise InvalidValueError(f"Invalid {token_type} value: {message}", token_type=token_type)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _member(token_type: str, key: str, validator: Validator, value: Any) -> None:
    """Validate a composite member, re-raising with the member name attached."""
    try:
        validator(value)
    except InvalidValueError as exc:
        raise InvalidValueError(
            f"Invalid {token_type} value: {key!r} -> {exc}", token_type=token_type
        ) from exc


def _require_object(token_type: str, value: Any, keys: tuple[str, ...]) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        _fail(token_type, f"expected an object, got {type(value).__name__}")
    missing = [key for key in keys if key not in value]
    if missing:
        _fail(token_type, f"missing required keys: {', '.join(missing)}")
    return value


# ---------------------------------------------------------------------------
# Scalar validators
# ---------------------------------------------------------------------------


def validate_color(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        _fail(TokenType.COLOR, f"expected a #RRGGBB or #RRGGBBAA hex string, got {value!r}")


def validate_dimension(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, str) or not _DIMENSION.match(value):
        _fail(TokenType.DIMENSION, f"expected a number followed by px or rem, got {value!r}")


def validate_duration(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, str) or not _DURATION.match(value):
        _fail(TokenType.DURATION, f"expected a number followed by ms, got {value!r}")


def validate_number(value: Any) -> None:
    if is_alias(value):
        return
    if not _is_number(value):
        _fail(TokenType.NUMBER, f"expected a number, got {value!r}")


def validate_font_family(value: Any) -> None:
    if is_alias(value) or isinstance(value, str):
        return
    if not isinstance(value, list) or not value:
        _fail(TokenType.FONT_FAMILY, f"expected a string or a list of strings, got {value!r}")
    for item in value:
        if not isinstance(item, str):
            _fail(TokenType.FONT_FAMILY, f"font names must be strings, got {item!r}")


def validate_font_weight(value: Any) -> None:
    if is_alias(value):
        return
    if _is_number(value):
        if not 1 <= value <= 1000:
            _fail(TokenType.FONT_WEIGHT, f"numeric weight must be in [1, 1000], got {value!r}")
        return
    if not isinstance(value, str) or value not in FONT_WEIGHT_KEYWORDS:
        _fail(TokenType.FONT_WEIGHT, f"unknown weight {value!r}")


def validate_cubic_bezier(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, list) or len(value) != 4:
        _fail(TokenType.CUBIC_BEZIER, f"expected a list of 4 numbers, got {value!r}")
    for index, point in enumerate(value):
        if is_alias(point):
            continue
        if not _is_number(point):
            _fail(TokenType.CUBIC_BEZIER, f"point {index} is not a number: {point!r}")
        # x coordinates are bounded, y coordinates are not
        if index % 2 == 0 and not 0 <= point <= 1:
            _fail(TokenType.CUBIC_BEZIER, f"x coordinate {index} must be in [0, 1], got {point!r}")


def validate_stroke_style(value: Any) -> None:
    if is_alias(value):
        return
    if isinstance(value, str):
        if value not in STROKE_STYLE_KEYWORDS:
            _fail(TokenType.STROKE_STYLE, f"unknown stroke style {value!r}")
        return
    obj = _require_object(TokenType.STROKE_STYLE, value, ("dashArray", "lineCap"))
    dash_array = obj["dashArray"]
    if not is_alias(dash_array):
        if not isinstance(dash_array, list) or not dash_array:
            _fail(TokenType.STROKE_STYLE, "dashArray must be a non-empty list of dimensions")
        for item in dash_array:
            _member(TokenType.STROKE_STYLE, "dashArray", validate_dimension, item)
    line_cap = obj["lineCap"]
    if not is_alias(line_cap) and (not isinstance(line_cap, str) or line_cap not in LINE_CAPS):
        _fail(TokenType.STROKE_STYLE, f"unknown lineCap {line_cap!r}")


# ---------------------------------------------------------------------------
# Composite validators
# ---------------------------------------------------------------------------

_BORDER_MEMBERS: dict[str, Validator] = {
    "color": validate_color,
    "width": validate_dimension,
    "style": validate_stroke_style,
}

_TRANSITION_MEMBERS: dict[str, Validator] = {
    "duration": validate_duration,
    "delay": validate_duration,
    "timingFunction": validate_cubic_bezier,
}

_SHADOW_MEMBERS: dict[str, Validator] = {
    "color": validate_color,
    "offsetX": validate_dimension,
    "offsetY": validate_dimension,
    "blur": validate_dimension,
    "spread": validate_dimension,
}

_TYPOGRAPHY_MEMBERS: dict[str, Validator] = {
    "fontFamily": validate_font_family,
    "fontSize": validate_dimension,
    "fontWeight": validate_font_weight,
    "letterSpacing": validate_dimension,
    "lineHeight": validate_number,
}


def _validate_members(token_type: str, value: Any, members: dict[str, Validator]) -> None:
    if is_alias(value):
        return
    obj = _require_object(token_type, value, tuple(members))
    for key, validator in members.items():
        _member(token_type, key, validator, obj[key])


def validate_border(value: Any) -> None:
    _validate_members(TokenType.BORDER, value, _BORDER_MEMBERS)


def validate_transition(value: Any) -> None:
    _validate_members(TokenType.TRANSITION, value, _TRANSITION_MEMBERS)


def validate_typography(value: Any) -> None:
    _validate_members(TokenType.TYPOGRAPHY, value, _TYPOGRAPHY_MEMBERS)


def validate_shadow(value: Any) -> None:
    """A single shadow object, or a non-empty list of layered shadows."""
    if isinstance(value, list):
        if not value:
            _fail(TokenType.SHADOW, "layered shadow list must not be empty")
        for layer in value:
            _validate_members(TokenType.SHADOW, layer, _SHADOW_MEMBERS)
        return
    _validate_members(TokenType.SHADOW, value, _SHADOW_MEMBERS)


def validate_gradient(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, list) or not value:
        _fail(TokenType.GRADIENT, f"expected a non-empty list of stops, got {value!r}")
    for stop in value:
        if is_alias(stop):
            continue
        obj = _require_object(TokenType.GRADIENT, stop, ("color", "position"))
        _member(TokenType.GRADIENT, "color", validate_color, obj["color"])
        position = obj["position"]
        if is_alias(position):
            continue
        if not _is_number(position) or not 0 <= position <= 1:
            _fail(TokenType.GRADIENT, f"stop position must be a number in [0, 1], got {position!r}")


# ---------------------------------------------------------------------------
# JSON type validators
# ---------------------------------------------------------------------------


def validate_string(value: Any) -> None:
    if not isinstance(value, str):
        _fail(TokenType.STRING, f"expected a string, got {value!r}")


def validate_boolean(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, bool):
        _fail(TokenType.BOOLEAN, f"expected a boolean, got {value!r}")


def validate_null(value: Any) -> None:
    if is_alias(value):
        return
    if value is not None:
        _fail(TokenType.NULL, f"expected null, got {value!r}")


def validate_object(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, Mapping):
        _fail(TokenType.OBJECT, f"expected an object, got {type(value).__name__}")


def validate_array(value: Any) -> None:
    if is_alias(value):
        return
    if not isinstance(value, list):
        _fail(TokenType.ARRAY, f"expected an array, got {type(value).__name__}")


VALIDATORS: dict[str, Validator] = {
    TokenType.COLOR: validate_color,
    TokenType.DIMENSION: validate_dimension,
    TokenType.FONT_FAMILY: validate_font_family,
    TokenType.FONT_WEIGHT: validate_font_weight,
    TokenType.DURATION: validate_duration,
    TokenType.CUBIC_BEZIER: validate_cubic_bezier,
    TokenType.NUMBER: validate_number,
    TokenType.STROKE_STYLE: validate_stroke_style,
    TokenType.BORDER: validate_border,
    TokenType.TRANSITION: validate_transition,
    TokenType.SHADOW: validate_shadow,
    TokenType.GRADIENT: validate_gradient,
    TokenType.TYPOGRAPHY: validate_typography,
    TokenType.STRING: validate_string,
    TokenType.BOOLEAN: validate_boolean,
    TokenType.NULL: validate_null,
    TokenType.OBJECT: validate_object,
    TokenType.ARRAY: validate_array,
}


def validate_value(token_type: str, value: Any) -> None:
    """Raise :class:`InvalidValueError` if *value* is not well formed for *token_type*."""
    validator = VALIDATORS.get(token_type)
    if validator is None:
        msg = f"Unknown token type {token_type!r}"
        raise InvalidValueError(msg, token_type=str(token_type))
    validator(value)
