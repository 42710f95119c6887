"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TOKENCTL_*`` prefix, ``__`` between section and key
  3. TOML file    — ``tokenctl.toml`` (see :mod:`tokenctl.config.discovery`)
  4. Code defaults — baked into the section models

So ``TOKENCTL_RESOLVE__FLATTEN_ALIASES=1`` beats ``[resolve]
flatten_aliases = false`` in the file, and ``--no-flatten-aliases`` beats
both (the per-command flags are applied on top through
:meth:`ResolveConfig.to_options`).
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from tokenctl.config.discovery import ConfigError, find_config, read_config_data
from tokenctl.config.models import OutputConfig, ResolveConfig

# TOML file for the TokSettings instance under construction.
_toml_path: ContextVar[Path | None] = ContextVar("_toml_path", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``tokenctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is not None and toml_path.is_file():
            try:
                self._data = read_config_data(toml_path)
            except ConfigError as exc:
                raise click.ClickException(str(exc)) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class TokSettings(BaseSettings):
    """Settings for one tokenctl invocation.

    Attributes:
        project_root: Directory holding ``tokenctl.toml`` (or CWD if none).
        config_path: The TOML file in effect, or None.
        no_color: Never emit ANSI styles, even on a terminal.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TOKENCTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- Global CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_color: bool = False

    # --- TOML sections ---
    resolve: ResolveConfig = Field(default_factory=ResolveConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """CLI kwargs, then env vars, then the TOML file. No dotenv or secrets."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_path.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: Path | str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> TokSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* must exist. Without one, ``tokenctl.toml``
        is discovered from *project_root* (or CWD), and the project root
        defaults to the directory the file was found in.

        Raises:
            click.ClickException: If *config_path* is missing or a config
                file is not valid TOML.
        """
        toml_path: Path | None
        if config_path is not None:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {toml_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_path.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        finally:
            _toml_path.reset(token)
