"""Global error handling middleware.

This module provides consistent error responses across all API endpoints.
All exceptions are caught and converted to a standardized JSON format with
appropriate HTTP status codes.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from statement_compare.core.errors import get_error
from statement_compare.core.exceptions import StatementProcessingError

logger = logging.getLogger(__name__)


async def handle_statement_processing_error(
    request: Request, exc: StatementProcessingError
) -> JSONResponse:
    """Handle custom statement processing exceptions.

    Args:
        request: The incoming request
        exc: The statement processing exception

    Returns:
        JSONResponse with error details from catalog
    """
    error_info = get_error(exc.error_code)

    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if request.app.debug:
        extra["details"] = exc.details

    logger.error(f"Statement processing error: {exc.error_code}", extra=extra)

    content = {
        "error_code": exc.error_code,
        "message": exc.message,
        "user_message": error_info["user_message"],
        "suggestion": error_info["suggestion"],
        "retry_allowed": error_info["retry_allowed"],
    }
    # Validation failures carry the reasons the caller must act on.
    if "errors" in exc.details:
        content["errors"] = exc.details["errors"]

    return JSONResponse(status_code=exc.http_status, content=content)


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with validation error details
    """
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    error_info = get_error("VAL_002")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error_code": "VAL_002",
            "message": " | ".join(error_messages),
            "user_message": error_info["user_message"],
            "suggestion": error_info["suggestion"],
            "retry_allowed": error_info["retry_allowed"],
        },
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    # In non-debug: do not log str(exc) or traceback (may include statement data).
    if request.app.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "SYS_001",
            "message": "Internal server error",
            "user_message": "An unexpected error occurred",
            "suggestion": "Please try again later or contact support",
            "retry_allowed": True,
        },
    )
