"""Token file loading.

Token files are JSON (``.json``, ``.tokens``, ``.tokens.json``) or YAML
(``.yaml``, ``.yml``). Both parsers preserve key order, which the
resolver carries through to its output.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

YAML_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml"})
_JSON_SCALARS = (str, int, float, bool, type(None))


class TokenFileError(ValueError):
    """A token file could not be read or does not hold a token tree."""

    code = "TOKEN_FILE"

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


def _new_yaml() -> YAML:
    """Create a fresh safe-mode YAML parser (plain dicts and lists)."""
    return YAML(typ="safe", pure=True)


def _check_json_compatible(node: Any, path: Path, trail: str = "") -> None:
    """Reject data JSON cannot hold: non-string keys and scalars such as dates."""
    where = f" under {trail!r}" if trail else ""
    if isinstance(node, Mapping):
        for key, child in node.items():
            if not isinstance(key, str):
                msg = f"{path}: mapping keys must be strings, got {key!r}{where}"
                raise TokenFileError(msg, path=path)
            _check_json_compatible(child, path, f"{trail}.{key}" if trail else key)
    elif isinstance(node, list):
        for child in node:
            _check_json_compatible(child, path, trail)
    elif not isinstance(node, _JSON_SCALARS):
        msg = f"{path}: unsupported value {node!r} ({type(node).__name__}){where}"
        raise TokenFileError(msg, path=path)


def parse_token_text(text: str, *, path: Path, fmt: str = "json") -> dict[str, Any]:
    """Parse token file *text* in *fmt* (``json`` or ``yaml``) into a tree."""
    try:
        data = _new_yaml().load(text) if fmt == "yaml" else json.loads(text)
    except (json.JSONDecodeError, YAMLError) as exc:
        msg = f"Invalid {fmt.upper()} in {path}: {exc}"
        raise TokenFileError(msg, path=path) from exc

    if not isinstance(data, dict):
        msg = f"{path}: top level must be an object, got {type(data).__name__}"
        raise TokenFileError(msg, path=path)
    _check_json_compatible(data, path)
    return data


def detect_format(path: Path) -> str:
    """Return ``yaml`` for YAML suffixes, ``json`` otherwise."""
    return "yaml" if path.suffix.lower() in YAML_SUFFIXES else "json"


def load_token_file(path: Path) -> dict[str, Any]:
    """Read and parse the token file at *path*.

    Raises:
        TokenFileError: If the file is missing, unreadable, or malformed.
    """
    if not path.is_file():
        msg = f"Token file not found: {path}"
        raise TokenFileError(msg, path=path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise TokenFileError(msg, path=path) from exc
    return parse_token_text(text, path=path, fmt=detect_format(path))
