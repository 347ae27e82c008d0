"""Custom exception hierarchy for pyulip.

Every error carries a stable ``code`` and the HTTP ``status_code`` a gateway
should answer with.  ``expose`` marks errors whose message is a safe,
caller-actionable fact; everything else is reported with a generic message
so upstream internals do not leak.
"""

from __future__ import annotations

from typing import Any

from pyulip._constants import AUTH_REJECTED_STATUSES


class UlipError(Exception):
    """Base exception for all pyulip errors."""

    code: str = "INTERNAL_ERROR"
    status_code: int = 500
    expose: bool = False

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        request_id: str | None = None,
        details: Any = None,
    ) -> None:
        self.path = path
        self.request_id = request_id
        self.details = details
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        """Whether the orchestrator may repeat the failed attempt."""
        return False


class UlipConfigError(UlipError):
    """Invalid or missing configuration."""


class UnauthorizedError(UlipError):
    """Caller failed gateway authentication (raised by the HTTP layer)."""

    code = "UNAUTHORIZED"
    status_code = 401
    expose = True


class RequestValidationError(UlipError):
    """Lookup parameters failed validation before any upstream call."""

    code = "VALIDATION_ERROR"
    status_code = 422
    expose = True


class UpstreamBadResponseError(UlipError):
    """Upstream payload is malformed or has an unexpected shape."""

    code = "ULIP_BAD_RESPONSE"
    status_code = 502


class UpstreamTimeoutError(UlipError):
    """Upstream did not answer within the per-attempt deadline."""

    code = "ULIP_TIMEOUT"
    status_code = 504

    @property
    def retryable(self) -> bool:
        return True


class UpstreamUnavailableError(UlipError):
    """HTTP-level failure talking to ULIP (error status or broken connection).

    ``upstream_status`` is ``None`` when no HTTP response was received.
    """

    code = "ULIP_UNAVAILABLE"
    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        upstream_status: int | None = None,
        path: str = "",
        request_id: str | None = None,
        details: Any = None,
    ) -> None:
        self.upstream_status = upstream_status
        super().__init__(message, path=path, request_id=request_id, details=details)

    @property
    def counts_against_breaker(self) -> bool:
        """Client errors point at a bad request, not an unhealthy upstream."""
        status = self.upstream_status
        return status is None or status >= 500 or status == 429

    @property
    def auth_rejected(self) -> bool:
        return self.upstream_status in AUTH_REJECTED_STATUSES

    @property
    def retryable(self) -> bool:
        return self.counts_against_breaker or self.auth_rejected


class UpstreamRejectedError(UpstreamUnavailableError):
    """ULIP answered but flagged the response envelope as an error."""

    @property
    def retryable(self) -> bool:
        return False


class CircuitOpenError(UlipError):
    """Circuit breaker is open; no upstream call was attempted."""

    code = "CIRCUIT_OPEN"
    status_code = 503


class NotFoundError(UlipError):
    """Upstream explicitly reported that the record does not exist."""

    code = "NOT_FOUND"
    status_code = 404
    expose = True


class BusinessRuleViolationError(UlipError):
    """Record exists but fails a domain rule (e.g. expired licence)."""

    code = "BUSINESS_RULE_VIOLATION"
    status_code = 400
    expose = True


_GENERIC_MESSAGE = "Request failed"


def error_response(exc: BaseException, request_id: str | None = None) -> tuple[int, dict[str, Any]]:
    """Map an exception to ``(status, body)`` for the gateway's error handler."""
    if isinstance(exc, UlipError):
        error: dict[str, Any] = {
            "code": exc.code,
            "message": str(exc) if exc.expose else _GENERIC_MESSAGE,
        }
        if exc.expose and exc.details is not None:
            error["details"] = exc.details
        return exc.status_code, {"requestId": request_id, "error": error}

    return 500, {
        "requestId": request_id,
        "error": {"code": "INTERNAL_ERROR", "message": "Internal server error"},
    }
