"""Tests for token file loading (JSON and YAML)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from tokenctl.infrastructure.loader import (
    TokenFileError,
    detect_format,
    load_token_file,
    parse_token_text,
)


class TestDetectFormat:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("tokens.json", "json"),
            ("tokens.tokens", "json"),
            ("tokens.tokens.json", "json"),
            ("tokens.yaml", "yaml"),
            ("tokens.YML", "yaml"),
        ],
    )
    def test_suffix(self, name: str, expected: str) -> None:
        assert detect_format(Path(name)) == expected


class TestParseTokenText:
    def test_json_preserves_order(self) -> None:
        tree = parse_token_text('{"z": {"$value": 1}, "a": {"$value": 2}}', path=Path("t.json"))
        assert list(tree) == ["z", "a"]

    def test_yaml(self) -> None:
        text = "colors:\n  $type: color\n  primary:\n    $value: '#ffffff'\n"
        tree = parse_token_text(text, path=Path("t.yaml"), fmt="yaml")
        assert tree == {"colors": {"$type": "color", "primary": {"$value": "#ffffff"}}}

    def test_yaml_preserves_order(self) -> None:
        text = "z:\n  $value: 1\na:\n  $value: 2\n"
        assert list(parse_token_text(text, path=Path("t.yaml"), fmt="yaml")) == ["z", "a"]

    def test_invalid_json(self) -> None:
        with pytest.raises(TokenFileError, match="Invalid JSON"):
            parse_token_text("{not json", path=Path("t.json"))

    def test_invalid_yaml(self) -> None:
        with pytest.raises(TokenFileError, match="Invalid YAML"):
            parse_token_text("a: [1, 2", path=Path("t.yaml"), fmt="yaml")

    @pytest.mark.parametrize("text", ["[1, 2]", '"tokens"', "null"])
    def test_top_level_must_be_object(self, text: str) -> None:
        with pytest.raises(TokenFileError, match="top level must be an object"):
            parse_token_text(text, path=Path("t.json"))

    def test_yaml_non_string_key(self) -> None:
        with pytest.raises(TokenFileError, match="mapping keys must be strings") as exc_info:
            parse_token_text("sizes:\n  1:\n    $value: 4px\n", path=Path("t.yaml"), fmt="yaml")
        assert "'sizes'" in str(exc_info.value)

    def test_yaml_date_rejected(self) -> None:
        text = "release:\n  $value: 2024-05-01\n"
        with pytest.raises(TokenFileError, match="unsupported value") as exc_info:
            parse_token_text(text, path=Path("t.yaml"), fmt="yaml")
        assert "'release.$value'" in str(exc_info.value)

    def test_yaml_quoted_date_is_a_string(self) -> None:
        tree = parse_token_text("release:\n  $value: '2024-05-01'\n", path=Path("t.yaml"), fmt="yaml")
        assert tree["release"]["$value"] == "2024-05-01"

    def test_error_carries_path_and_code(self) -> None:
        with pytest.raises(TokenFileError) as exc_info:
            parse_token_text("[]", path=Path("t.json"))
        assert exc_info.value.path == Path("t.json")
        assert exc_info.value.code == "TOKEN_FILE"


class TestLoadTokenFile:
    def test_load_json(self, write_tokens: Callable[..., Path]) -> None:
        path = write_tokens({"a": {"$value": 1}})
        assert load_token_file(path) == {"a": {"$value": 1}}

    def test_load_yaml(self, write_tokens: Callable[..., Path]) -> None:
        path = write_tokens("a:\n  $value: 1\n", name="tokens.yml")
        assert load_token_file(path) == {"a": {"$value": 1}}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(TokenFileError, match="Token file not found"):
            load_token_file(tmp_path / "absent.json")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        with pytest.raises(TokenFileError, match="Token file not found"):
            load_token_file(tmp_path)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(TokenFileError, match="Cannot read"):
            load_token_file(path)
