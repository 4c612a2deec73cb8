"""
Centralized error handlers for FastAPI.

Maps domain errors and request decoding failures to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the {code, errno, error} body.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.domain.boxes.errors import BoxesDomainError, StorageFault
from app.shared.errors.mapping import (
    ERRNO_INTERNAL,
    ERRNO_RATE_LIMITED,
    EndpointError,
    decode_failure_from_validation,
    from_decode_failure,
    from_status,
    from_storage_fault,
)

logger = logging.getLogger(__name__)


def _error_response(error: EndpointError) -> JSONResponse:
    """Render an EndpointError as a JSON response."""
    return JSONResponse(status_code=error.status_code, content=error.body.to_dict())


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(EndpointError)
    async def handle_endpoint_error(
        _request: Request, exc: EndpointError
    ) -> JSONResponse:
        """Render errors raised directly by routes."""
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle undecodable request bodies."""
        failure = decode_failure_from_validation(exc.errors())
        logger.warning("Rejected request body: %s", failure)
        return _error_response(from_decode_failure(failure))

    # SlowAPIMiddleware calls this handler without awaiting it.
    @app.exception_handler(RateLimitExceeded)
    def handle_rate_limited(
        _request: Request, exc: RateLimitExceeded
    ) -> JSONResponse:
        """Handle rate limit overruns."""
        logger.warning("Rate limit exceeded: %s", exc.detail)
        return _error_response(
            from_status(HTTPStatus.TOO_MANY_REQUESTS, ERRNO_RATE_LIMITED)
        )

    @app.exception_handler(StorageFault)
    async def handle_storage_fault(
        _request: Request, exc: StorageFault
    ) -> JSONResponse:
        """Handle record store failures."""
        logger.error("Storage fault: %s", exc.message)
        return _error_response(from_storage_fault(exc))

    @app.exception_handler(BoxesDomainError)
    async def handle_boxes_domain(
        _request: Request, exc: BoxesDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled boxes domain errors."""
        logger.error("Unhandled boxes domain error: %s", exc.message)
        return _error_response(
            from_status(HTTPStatus.INTERNAL_SERVER_ERROR, ERRNO_INTERNAL)
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(
            from_status(HTTPStatus.INTERNAL_SERVER_ERROR, ERRNO_INTERNAL)
        )
