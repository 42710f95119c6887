"""ServiceResult and ServiceError — the service contract.

INVARIANT: Service methods return ServiceResult instead of raising.
Every error a service reports carries the ``code`` of the exception that
caused it, so ``--json`` consumers can branch on codes, not messages.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(
        cls, exc: Exception, *, detail: dict[str, Any] | None = None
    ) -> ServiceError:
        """Wrap *exc*; its ``code`` attribute (or class name) becomes the code."""
        code = getattr(exc, "code", None) or type(exc).__name__.upper()
        return cls(code=code, message=str(exc), detail=detail or {})


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"resolve"``, ``"check"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, e.g. aliases left unresolved.
        error: Structured error if ``ok`` is False.
        meta: Telemetry span tree when ``--verbose`` is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def exit_code(self) -> int:
        """Process exit status for the CLI: 0 on success, 1 on failure."""
        return 0 if self.ok else 1
