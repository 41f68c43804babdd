"""
Error Handling Utilities
Provides sanitized error messages and consistent error responses.
"""

import logging
from enum import Enum
from typing import Any

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.integrations.moneybird.exceptions import MoneybirdAPIError

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error codes for frontend handling."""

    # Moneybird integration errors
    MONEYBIRD_NOT_CONNECTED = "moneybird_not_connected"
    MONEYBIRD_NO_ADMINISTRATION = "moneybird_no_administration"
    MONEYBIRD_TOKEN_INVALID = "moneybird_token_invalid"
    MONEYBIRD_DATA_FETCH_FAILED = "moneybird_data_fetch_failed"

    # General errors
    VALIDATION_ERROR = "validation_error"
    INTERNAL_ERROR = "internal_error"


# User-friendly error messages
ERROR_MESSAGES = {
    ErrorCode.MONEYBIRD_NOT_CONNECTED: "Moneybird is not connected. Add a Moneybird token first.",
    ErrorCode.MONEYBIRD_NO_ADMINISTRATION: "No Moneybird administration found for this connection.",
    ErrorCode.MONEYBIRD_TOKEN_INVALID: "Invalid token or no administration found.",
    ErrorCode.MONEYBIRD_DATA_FETCH_FAILED: "Unable to fetch data from Moneybird. Please try again in a moment.",
    ErrorCode.VALIDATION_ERROR: "Invalid request. Please check your input and try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again later.",
}


def get_error_code_for_exception(exception: Exception) -> tuple[ErrorCode, int]:
    """
    Map exception types to error codes and HTTP status codes.

    Args:
        exception: The exception that occurred

    Returns:
        Tuple of (error_code, http_status_code)
    """
    if isinstance(exception, MoneybirdAPIError):
        if exception.status_code in (401, 403):
            return ErrorCode.MONEYBIRD_TOKEN_INVALID, status.HTTP_401_UNAUTHORIZED
        return ErrorCode.MONEYBIRD_DATA_FETCH_FAILED, status.HTTP_502_BAD_GATEWAY

    if isinstance(exception, ValueError):
        return ErrorCode.VALIDATION_ERROR, status.HTTP_400_BAD_REQUEST

    return ErrorCode.INTERNAL_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    error_code: ErrorCode,
    http_status: int,
    message: str | None = None,
    **extra: Any,
) -> JSONResponse:
    """
    Build a JSON error body of the form {"error": ..., "error_code": ...}.

    Extra keyword arguments are merged into the body, e.g. connected=False.
    """
    content: dict[str, Any] = dict(extra)
    content["error"] = message or ERROR_MESSAGES[error_code]
    content["error_code"] = error_code.value
    return JSONResponse(status_code=http_status, content=content)


async def global_exception_handler(_request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches unhandled exceptions and returns a structured error with the
    underlying message for diagnostics.
    Excludes HTTPException (intentional responses) and ValidationError (FastAPI validation).
    """
    if isinstance(exc, (HTTPException, RequestValidationError)):
        raise exc

    error_code, http_status = get_error_code_for_exception(exc)
    logger.error("Unhandled error [%s]: %s", error_code.value, exc, exc_info=exc)

    return error_response(error_code, http_status, message=str(exc) or None)
