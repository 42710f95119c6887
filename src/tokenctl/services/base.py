"""BaseService — shared foundation for tokenctl services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from tokenctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from tokenctl.config.settings import TokSettings

log = structlog.get_logger(__name__)


class BaseService:
    """Base for service-layer classes.

    Every service receives the merged :class:`TokSettings` at construction
    time; config sections (``settings.resolve``) provide option defaults.
    """

    def __init__(self, settings: TokSettings) -> None:
        self._settings = settings

    @staticmethod
    def _failure(
        op: str, exc: Exception, *, detail: dict[str, Any] | None = None
    ) -> ServiceResult:
        """Build a failed ServiceResult from a domain or loader error."""
        error = ServiceError.from_exception(exc, detail=detail)
        log.debug("service.failed", op=op, code=error.code, message=error.message)
        return ServiceResult(ok=False, op=op, error=error)
