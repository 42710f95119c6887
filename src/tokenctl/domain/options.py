"""Resolution options."""

from __future__ import annotations

from pydantic import BaseModel


class ResolveOptions(BaseModel):
    """Four independent switches controlling a resolution run.

    Attributes:
        resolve_aliases: Replace alias strings with the aliased token.
        publish_metadata: Add ``_kind`` / ``_path`` (and ``_name`` on aliases).
        flatten_aliases: Replace an aliased token with its bare ``$value``.
        skip_validation: Skip value validation; unresolvable aliases pass through.
    """

    model_config = {"frozen": True}

    resolve_aliases: bool = False
    publish_metadata: bool = False
    flatten_aliases: bool = False
    skip_validation: bool = False
