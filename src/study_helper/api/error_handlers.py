"""
Exception handlers turning orchestrator failures into JSON error bodies.

Maps orchestrator exceptions to HTTP status codes and the JSON shapes the
browser UI understands.
"""

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from study_helper.orchestrator.exceptions import (
    MissingPromptError,
    ProviderUnavailableError,
    UpstreamProviderError,
)

logger = structlog.get_logger(__name__)


async def provider_unavailable_handler(request: Request, exc: ProviderUnavailableError) -> JSONResponse:
    """
    Handle a rate-limited/overloaded provider when no degraded answer is allowed.
    
    Maps to 429 (RATE_LIMIT) or 503 (OVERLOADED) and sets Retry-After.
    """
    logger.warning(
        "Provider unavailable",
        error=exc.error_code,
        retry_after_seconds=exc.retry_after_seconds,
    )
    
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "retryAfterSeconds": exc.retry_after_seconds,
            "detail": exc.detail,
        },
        headers={"Retry-After": str(exc.retry_after_seconds)},
    )


async def upstream_error_handler(request: Request, exc: UpstreamProviderError) -> JSONResponse:
    """
    Handle generic upstream failures (empty response, HTTP error, network error).
    
    Maps to 500 Internal Server Error.
    """
    logger.error("Upstream provider error", error=exc.error, message=exc.message)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": exc.error,
            "message": exc.message,
            "detail": exc.detail,
        },
    )


async def missing_prompt_handler(request: Request, exc: MissingPromptError) -> JSONResponse:
    """Maps to 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message},
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies or parameters.
    
    Maps to 400 Bad Request instead of FastAPI's default 422.
    """
    logger.warning("Invalid request format", errors=exc.errors())
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for anything the routes did not anticipate.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Unexpected error",
            "message": str(exc),
        },
    )


# Registered in main.py, most specific first
EXCEPTION_HANDLERS = {
    ProviderUnavailableError: provider_unavailable_handler,
    UpstreamProviderError: upstream_error_handler,
    MissingPromptError: missing_prompt_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
