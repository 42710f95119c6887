"""Config file discovery.

``tokenctl.toml`` is searched for from the working directory upwards, the
way git finds ``.git/``. The search never leaves the enclosing repository:
a directory holding ``.git`` or ``.hg`` is the last one checked. The
``TOKENCTL_CONFIG`` env var and the ``--config`` flag bypass the search.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "tokenctl.toml"
CONFIG_ENV_VAR = "TOKENCTL_CONFIG"

_REPO_MARKERS: tuple[str, ...] = (".git", ".hg")


class ConfigError(ValueError):
    """A config file exists but cannot be parsed."""

    code = "CONFIG"

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


def _search_dirs(start: Path) -> Iterator[Path]:
    """Yield *start* and its parents up to the repository or filesystem root."""
    current = start.resolve()
    while True:
        yield current
        if any((current / marker).exists() for marker in _REPO_MARKERS):
            return
        if current.parent == current:
            return
        current = current.parent


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    A set ``TOKENCTL_CONFIG`` must name an existing file; when it does not,
    no config is used rather than falling back to the search.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config_data(path: Path) -> dict[str, Any]:
    """Parse the TOML file at *path*.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg, path=path) from exc
