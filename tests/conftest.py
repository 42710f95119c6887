"""Shared pytest fixtures and test helpers for tokenctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from tokenctl.config.settings import TokSettings
from tokenctl.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's TOKENCTL_* environment out of the tests."""
    monkeypatch.delenv("TOKENCTL_CONFIG", raising=False)
    for key in (
        "TOKENCTL_RESOLVE__RESOLVE_ALIASES",
        "TOKENCTL_RESOLVE__PUBLISH_METADATA",
        "TOKENCTL_RESOLVE__FLATTEN_ALIASES",
        "TOKENCTL_RESOLVE__SKIP_VALIDATION",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_cli_state() -> Generator[None]:
    """Undo the logging and telemetry setup performed by ``AppContext``."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so no outer tokenctl.toml is discovered."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> TokSettings:
    """Default settings rooted at a temp directory."""
    return TokSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def button_tree() -> dict[str, Any]:
    """A color token plus a button that aliases it."""
    return {
        "colors": {
            "primary": {"$type": "color", "$value": "#ffffff"},
        },
        "button": {"$value": "{colors.primary}"},
    }


@pytest.fixture
def write_tokens(tmp_path: Path) -> Callable[..., Path]:
    """Factory: write a token tree to ``tmp_path/<name>`` as JSON (or raw text)."""

    def _write(tree: Any, name: str = "tokens.json") -> Path:
        path = tmp_path / name
        text = tree if isinstance(tree, str) else json.dumps(tree)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
