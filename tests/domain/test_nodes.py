"""Tests for Token / Group classification and tree summaries."""

from __future__ import annotations

import pytest

from tokenctl.domain.errors import InvalidNameError, MalformedNodeError
from tokenctl.domain.nodes import Group, Token, TreeSummary, classify_node, summarize_tree


class TestClassifyNode:
    def test_token(self) -> None:
        node = classify_node(
            "primary",
            {
                "$type": "color",
                "$value": "#ffffff",
                "$description": "Brand",
                "$extensions": {"org.example": {"a": 1}},
            },
        )
        assert node == Token(
            name="primary",
            value="#ffffff",
            type="color",
            description="Brand",
            extensions={"org.example": {"a": 1}},
        )

    def test_null_value_is_a_token(self) -> None:
        node = classify_node("nothing", {"$value": None})
        assert isinstance(node, Token)
        assert node.value is None

    def test_group_children_filtered(self) -> None:
        node = classify_node(
            "colors",
            {
                "$type": "color",
                "$description": "Palette",
                "primary": {"$value": "#000000"},
                "nested": {},
                "list": [1, 2],
                "scalar": "x",
                "nothing": None,
                "$extensions": {"x": {}},
            },
        )
        assert isinstance(node, Group)
        assert node.type == "color"
        assert node.description == "Palette"
        assert list(node.children) == ["primary", "nested"]

    def test_empty_group(self) -> None:
        node = classify_node("empty", {})
        assert node == Group(name="empty")

    def test_empty_type_is_ignored(self) -> None:
        node = classify_node("t", {"$type": "", "$value": 1})
        assert isinstance(node, Token)
        assert node.type is None

    def test_null_type_is_ignored(self) -> None:
        assert classify_node("t", {"$type": None, "$value": 1}).type is None

    def test_empty_extensions_kept(self) -> None:
        node = classify_node("t", {"$value": 1, "$extensions": {}})
        assert isinstance(node, Token)
        assert node.extensions == {}

    def test_invalid_name(self) -> None:
        with pytest.raises(InvalidNameError):
            classify_node("a.b", {"$value": 1})

    def test_non_mapping(self) -> None:
        with pytest.raises(MalformedNodeError, match="'colors.primary'") as exc_info:
            classify_node("primary", "#ffffff", ("colors",))
        assert exc_info.value.path == ["colors", "primary"]

    @pytest.mark.parametrize("declared", [["color"], 7, 0, False, {"a": 1}])
    def test_non_string_type(self, declared: object) -> None:
        with pytest.raises(MalformedNodeError, match=r"\$type at 'n' must be a string"):
            classify_node("n", {"$type": declared, "$value": 1})

    def test_frozen(self) -> None:
        node = classify_node("n", {"$value": 1})
        with pytest.raises(Exception):
            node.value = 2  # type: ignore[misc]


class TestSummarizeTree:
    def test_counts(self) -> None:
        tree = {
            "colors": {
                "primary": {"$value": "#000000"},
                "secondary": {"$value": "{colors.primary}"},
            },
            "border": {
                "$value": {"color": "{colors.primary}", "width": "1px", "style": "solid"},
            },
            "stack": {"$value": ["{colors.primary}", "{colors.secondary}"]},
        }
        assert summarize_tree(tree) == TreeSummary(tokens=4, groups=1, aliases=4)

    def test_empty(self) -> None:
        assert summarize_tree({}) == TreeSummary()
