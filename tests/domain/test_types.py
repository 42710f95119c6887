"""Tests for domain type enums — parametrized."""

import pytest

from tokenctl.domain.types import METADATA_KEYS, NodeKind, TokenType

ENUM_CASES = [
    (
        TokenType,
        {
            "color",
            "dimension",
            "fontFamily",
            "fontWeight",
            "duration",
            "cubicBezier",
            "number",
            "strokeStyle",
            "border",
            "transition",
            "shadow",
            "gradient",
            "typography",
            "string",
            "boolean",
            "null",
            "object",
            "array",
        },
    ),
    (
        NodeKind,
        {"token", "group", "alias"},
    ),
]


@pytest.mark.parametrize(
    "enum_cls,expected_values",
    ENUM_CASES,
    ids=[cls.__name__ for cls, _ in ENUM_CASES],
)
def test_enum_members_and_values(enum_cls: type, expected_values: set[str]) -> None:
    """Each StrEnum has the expected members with matching string values."""
    actual_values = {e.value for e in enum_cls}
    assert actual_values == expected_values
    for member in enum_cls:
        assert member == member.value
        assert isinstance(member, str)


def test_metadata_keys_are_underscored() -> None:
    assert all(key.startswith("_") for key in METADATA_KEYS)
