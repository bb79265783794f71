"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
Every failure, on the catalog backend and on the gateway, is an AppException
tagged with one ErrorKind and rendered as the same envelope:

    {"success": false, "error": "<message>", "details": {...}}
"""

from __future__ import annotations

import enum
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


# Module logger
logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    """
    Fixed error taxonomy.

    Each kind has a default HTTP status. Errors relayed from the catalog
    backend may carry a different status; see ErrorKind.from_status.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    FORBIDDEN = "FORBIDDEN"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    GATEWAY_TIMEOUT = "GATEWAY_TIMEOUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    def __str__(self) -> str:
        return self.value

    @property
    def status_code(self) -> int:
        return _KIND_STATUS[self]

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        """Pick the kind for an arbitrary HTTP error status."""
        for kind, status in _KIND_STATUS.items():
            if status == status_code:
                return kind
        if 400 <= status_code < 500:
            return cls.VALIDATION_ERROR
        return cls.INTERNAL_ERROR


_KIND_STATUS = {
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
    ErrorKind.GATEWAY_TIMEOUT: 504,
    ErrorKind.INTERNAL_ERROR: 500,
}


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Usage:
        raise AppException("Product ID does not exist", ErrorKind.NOT_FOUND)
        raise AppException("Upstream said no", ErrorKind.VALIDATION_ERROR, status_code=422)
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            kind: Error kind from the fixed taxonomy
            details: Additional structured error context (optional)
            status_code: HTTP status override (defaults to the kind's status)
        """
        self.message = message
        self.kind = kind
        self.status_code = status_code or kind.status_code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def code(self) -> str:
        """Machine-readable error code."""
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the failure envelope."""
        error_dict: Dict[str, Any] = {
            "success": False,
            "error": self.message,
        }

        if self.details:
            error_dict["details"] = self.details

        return error_dict

    def __repr__(self) -> str:
        return (
            f"AppException(kind={self.kind.value!r}, "
            f"status_code={self.status_code}, message={self.message!r})"
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to the JSON failure envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def _summarize_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "value_error"),
        }
        for error in exc.errors()
    ]


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and answer with a generic 500 envelope."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=internal_error().to_dict()
    )


def register_exception_handlers(app: FastAPI, validation_status: int = 422) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
        validation_status: Status used for request body/path validation failures
    """

    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = validation_error(
            "Invalid request data",
            {"errors": _summarize_validation_errors(exc)},
            status_code=validation_status,
        )
        return await app_exception_handler(request, error)

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def validation_error(
    message: str,
    details: Optional[Dict[str, Any]] = None,
    status_code: Optional[int] = None
) -> AppException:
    """Create local input validation exception."""
    return AppException(message, ErrorKind.VALIDATION_ERROR, details, status_code)


def product_not_found(product_id: Optional[Any] = None) -> AppException:
    """Create product not found exception (catalog backend)."""
    details = {"product_id": product_id} if product_id is not None else {}
    return AppException("Product ID does not exist", ErrorKind.NOT_FOUND, details)


def product_exists(name: str, country: str) -> AppException:
    """Create duplicate (name, country) exception for creation."""
    return AppException(
        "Product information already exists. Try different information.",
        ErrorKind.CONFLICT,
        {"name": name, "country": country}
    )


def product_conflict(existing_id: Any, name: str, country: str) -> AppException:
    """Create duplicate (name, country) exception for an update."""
    return AppException(
        "A product with the same name and country already exists.",
        ErrorKind.CONFLICT,
        {
            "existing_product_id": existing_id,
            "conflict_fields": {"name": name, "country": country},
        }
    )


def product_trashed(product_id: Any) -> AppException:
    """Create exception for mutating a soft-deleted product."""
    return AppException(
        "Product is deleted. It can only be restored.",
        ErrorKind.FORBIDDEN,
        {"product_id": product_id}
    )


def product_already_deleted(product_id: Any) -> AppException:
    """Create exception for deleting a soft-deleted product again."""
    return AppException(
        "Product is already deleted.",
        ErrorKind.FORBIDDEN,
        {"product_id": product_id}
    )


def not_found(message: str = "Product not found") -> AppException:
    """Create generic not found exception (gateway)."""
    return AppException(message, ErrorKind.NOT_FOUND)


def service_unavailable(service: str) -> AppException:
    """Create exception for a failed liveness probe."""
    return AppException(
        "Backend service is unavailable",
        ErrorKind.SERVICE_UNAVAILABLE,
        {"service": service, "status": "unavailable", "timestamp": _timestamp()}
    )


def gateway_timeout(service: str, operation: str, timeout_ms: int) -> AppException:
    """Create exception for a forwarded call that exceeded its bound."""
    return AppException(
        f"Request timed out while {operation}",
        ErrorKind.GATEWAY_TIMEOUT,
        {"service": service, "status": "timeout", "timeout_ms": timeout_ms}
    )


def connection_refused(service: str) -> AppException:
    """Create exception for an actively refused connection."""
    return AppException(
        "Cannot connect to backend service",
        ErrorKind.SERVICE_UNAVAILABLE,
        {"service": service, "status": "connection_refused", "timestamp": _timestamp()}
    )


def connection_error(service: str, error_code: str) -> AppException:
    """Create exception for any other transport failure."""
    return AppException(
        "Error connecting to backend service",
        ErrorKind.SERVICE_UNAVAILABLE,
        {
            "service": service,
            "status": "connection_error",
            "error_code": error_code,
            "timestamp": _timestamp(),
        }
    )


def upstream_error(
    service: str,
    operation: str,
    status_code: int,
    body: Dict[str, Any]
) -> AppException:
    """
    Relay an error status reported by the catalog backend.

    The message is taken from the upstream body's ``message`` or ``error``
    field; the whole body is attached under ``details.response``.
    """
    message = body.get("message") or body.get("error")
    if not isinstance(message, str) or not message:
        message = f"Error during {operation}"

    details: Dict[str, Any] = {
        "service": service,
        "status": "responding_with_error",
        "error_code": status_code,
        "response": body,
    }
    if isinstance(body.get("details"), dict):
        details["upstream_details"] = body["details"]

    return AppException(
        message,
        ErrorKind.from_status(status_code),
        details,
        status_code=status_code,
    )


def internal_error(message: str = "Internal Server Error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, ErrorKind.INTERNAL_ERROR)
