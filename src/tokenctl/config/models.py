"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tokenctl.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from tokenctl.domain.options import ResolveOptions

# --- tokenctl.toml sections ---


class ResolveConfig(BaseModel):
    """[resolve] section — default resolution switches."""

    model_config = {"frozen": True}

    resolve_aliases: bool = False
    publish_metadata: bool = False
    flatten_aliases: bool = False
    skip_validation: bool = False

    def to_options(self, **overrides: bool | None) -> ResolveOptions:
        """Build :class:`ResolveOptions`, letting non-None *overrides* win.

        CLI flags are tri-state: None means "not given, use config".
        """
        values = self.model_dump()
        for key, value in overrides.items():
            if key not in values:
                msg = f"Unknown resolve option: {key}"
                raise KeyError(msg)
            if value is not None:
                values[key] = value
        return ResolveOptions(**values)


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0, le=8)
