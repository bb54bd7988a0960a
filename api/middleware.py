"""
Consolidated middleware for the Buffet Rating API
"""

import time
import logging
from datetime import datetime
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import ServiceValidationError, NotFoundError, StoreUnavailableError

logger = logging.getLogger("buffetrating.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    elif isinstance(obj, (str, int, float, bool)) or obj is None:
        return obj
    # e.g. exceptions carried in pydantic error contexts
    return str(obj)


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with an id, and echo the id and timing as response headers"""

    async def dispatch(self, request: Request, call_next):
        # Honor an id set by API Gateway or a load balancer
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        path = request.url.path

        logger.info(
            f"{request.method} {path} started [{request_id}]",
            extra={
                "request_id": request_id,
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            process_time = time.perf_counter() - start_time
            logger.error(
                f"{request.method} {path} failed after {process_time:.4f}s [{request_id}]: {exc}",
                extra={"request_id": request_id},
                exc_info=True,
            )
            raise

        process_time = time.perf_counter() - start_time
        logger.info(
            f"{request.method} {path} -> {response.status_code} in {process_time:.4f}s [{request_id}]",
            extra={"request_id": request_id, "status_code": response.status_code},
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


def _error_json(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    """Build the error envelope shared by every handler"""
    error = {"code": code, "message": message}
    if details:
        error["details"] = make_serializable(details)
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors (malformed request bodies and params)"""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    return _error_json(
        status.HTTP_422_UNPROCESSABLE_CONTENT,
        "VALIDATION_ERROR",
        "Request validation failed",
        exc.errors(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return _error_json(exc.status_code, f"HTTP_{exc.status_code}", exc.detail)


async def service_validation_exception_handler(
    request: Request, exc: ServiceValidationError
):
    """Handle service validation errors such as invalid vote values"""
    logger.warning(f"Service validation error on {request.url.path}: {exc}")

    return _error_json(
        status.HTTP_400_BAD_REQUEST,
        exc.code or "SERVICE_VALIDATION_ERROR",
        str(exc),
        exc.details,
    )


async def not_found_exception_handler(request: Request, exc: NotFoundError):
    """Handle not found errors"""
    logger.warning(f"Resource not found on {request.url.path}: {exc}")

    return _error_json(status.HTTP_404_NOT_FOUND, exc.code or "NOT_FOUND", str(exc))


async def store_unavailable_exception_handler(
    request: Request, exc: StoreUnavailableError
):
    """Handle record store failures without exposing store details"""
    logger.error(
        f"Record store failure on {request.url.path} during {exc.operation}: {exc}",
        exc_info=exc,
    )

    return _error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "Internal server error",
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url.path}: {exc}")

    return _error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )
