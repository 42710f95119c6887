"""ResolveService — load a token file, resolve it, and report the outcome.

Domain and loader errors never escape this layer: they become a failed
ServiceResult whose ``error.code`` is the exception's ``code``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import structlog

from tokenctl.domain.aliases import is_alias
from tokenctl.domain.errors import DesignTokenError, format_path
from tokenctl.domain.nodes import summarize_tree
from tokenctl.domain.options import ResolveOptions
from tokenctl.domain.resolver import resolve_tokens
from tokenctl.domain.types import DESCRIPTION_KEY, EXTENSIONS_KEY, PATH_KEY, VALUE_KEY
from tokenctl.infrastructure.loader import TokenFileError, load_token_file
from tokenctl.services.base import BaseService
from tokenctl.services.result import ServiceResult
from tokenctl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)

# Output keys whose contents are never alias references.
_OPAQUE_KEYS = frozenset({DESCRIPTION_KEY, EXTENSIONS_KEY, PATH_KEY})


def _unresolved_aliases(node: Any, path: tuple[str, ...] = ()) -> Iterator[tuple[str, str]]:
    """Yield ``(alias, location)`` for every alias string left in resolved output."""
    if is_alias(node):
        yield node, format_path(path)
    elif isinstance(node, Mapping):
        for key, child in node.items():
            if key in _OPAQUE_KEYS:
                continue
            yield from _unresolved_aliases(child, path if key == VALUE_KEY else (*path, key))
    elif isinstance(node, list):
        for index, child in enumerate(node):
            yield from _unresolved_aliases(child, (*path, f"[{index}]"))


class ResolveService(BaseService):
    """Resolve and check design token trees."""

    def _options(self, options: ResolveOptions | None) -> ResolveOptions:
        if options is not None:
            return options
        return self._settings.resolve.to_options()

    def _load(self, path: Path) -> dict[str, Any]:
        with trace_span("load") as span:
            tree = load_token_file(path)
            if span:
                span.annotate("entries", len(tree))
        log.debug("tokens.loaded", source=str(path), entries=len(tree))
        return tree

    def _run(
        self,
        op: str,
        tree: Mapping[str, Any],
        options: ResolveOptions,
        *,
        source: str,
        include_tree: bool,
    ) -> ServiceResult:
        try:
            with trace_span("resolve") as span:
                resolved = resolve_tokens(tree, options)
                summary = summarize_tree(tree)
                if span:
                    span.annotate("tokens", summary.tokens)
        except DesignTokenError as exc:
            log.debug("tokens.failed", source=source, code=exc.code)
            return self._failure(op, exc, detail={"source": source, **exc.detail()})

        log.debug(
            "tokens.resolved",
            source=source,
            tokens=summary.tokens,
            groups=summary.groups,
            aliases=summary.aliases,
        )
        warnings: list[str] = []
        if options.resolve_aliases and options.skip_validation:
            warnings = [
                f"Unresolved alias {alias} at {where}"
                for alias, where in _unresolved_aliases(resolved)
            ]
        data: dict[str, Any] = {
            "source": source,
            "token_count": summary.tokens,
            "group_count": summary.groups,
            "alias_count": summary.aliases,
            "options": options.model_dump(),
        }
        if include_tree:
            data["tokens"] = resolved
        else:
            data["valid"] = True
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @traced
    def resolve_tree(
        self,
        tree: Mapping[str, Any],
        options: ResolveOptions | None = None,
        *,
        source: str = "<memory>",
    ) -> ServiceResult:
        """Resolve an in-memory token tree."""
        return self._run("resolve", tree, self._options(options), source=source, include_tree=True)

    @traced
    def resolve_file(self, path: Path, options: ResolveOptions | None = None) -> ServiceResult:
        """Load the token file at *path* and resolve it."""
        try:
            tree = self._load(path)
        except TokenFileError as exc:
            return self._failure("resolve", exc, detail={"source": str(path)})
        return self._run("resolve", tree, self._options(options), source=str(path), include_tree=True)

    @traced
    def check_file(self, path: Path, options: ResolveOptions | None = None) -> ServiceResult:
        """Validate the token file at *path* without returning the resolved tree.

        Aliases are always resolved so that dangling references, cycles,
        and type mismatches are reported.
        """
        try:
            tree = self._load(path)
        except TokenFileError as exc:
            return self._failure("check", exc, detail={"source": str(path)})
        opts = self._options(options).model_copy(update={"resolve_aliases": True})
        return self._run("check", tree, opts, source=str(path), include_tree=False)
