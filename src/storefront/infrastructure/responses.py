"""Boundary envelope: ``{"success": ...}`` bodies and error-kind status codes."""

from __future__ import annotations

from typing import Any

import structlog

from storefront.domain.exceptions import DomainException, ErrorKind

log = structlog.get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.AUTH_FAILURE: 401,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.INTERNAL: 500,
}

GENERIC_MESSAGE = "Something went wrong. Please try again later."

# Kinds whose messages are replaced by GENERIC_MESSAGE.
_OPAQUE_KINDS = frozenset({ErrorKind.UPSTREAM, ErrorKind.INTERNAL})


def success(**payload: Any) -> dict[str, Any]:
    return {"success": True, **payload}


def error_response(exc: DomainException) -> tuple[int, dict[str, Any]]:
    """Map a domain error to ``(status, body)``."""
    status = STATUS_BY_KIND[exc.kind]
    if exc.kind in _OPAQUE_KINDS:
        log.error("request.failed", kind=exc.kind.value, error=str(exc), exc_info=exc)
        message = GENERIC_MESSAGE
    else:
        message = str(exc)
    return status, {"success": False, "message": message}
