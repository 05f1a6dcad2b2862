"""Centralized error handler for outer layers (CLI, HTTP adapters).

Maps service exceptions to a status code and response text while preserving
technical details in logs for debugging.
"""

import logging
from typing import Tuple

from src.services.exceptions import DatabaseError, ServiceError, ValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
DATABASE_ERROR_MESSAGE = "A database error occurred. Please try again."


def to_error_response(exception: Exception) -> Tuple[int, str]:
    """Convert an exception to (status_code, body text).

    - ValidationError: 400 with the joined field errors
    - other ServiceError: its http_status_code and message
    - DatabaseError and unexpected exceptions: 500 without technical details
    """
    if isinstance(exception, ValidationError):
        return exception.http_status_code, exception.message

    if isinstance(exception, DatabaseError):
        return exception.http_status_code, DATABASE_ERROR_MESSAGE

    if isinstance(exception, ServiceError):
        status = getattr(exception, "http_status_code", 500)
        if status >= 500:
            return status, GENERIC_ERROR_MESSAGE
        return status, exception.message

    return 500, GENERIC_ERROR_MESSAGE


def handle_error(exception: Exception, operation: str = "Operation") -> Tuple[int, str]:
    """Log an exception and return its (status_code, body text).

    Example:
        try:
            create_product(payload)
        except Exception as e:
            status, body = handle_error(e, operation="Create product")
    """
    status, message = to_error_response(exception)
    _log_error(exception, operation, status)
    return status, message


def _log_error(exception: Exception, operation: str, status: int) -> None:
    """Client errors are warnings; everything else is logged with a traceback."""
    if status < 500:
        logger.warning(f"{operation} failed ({status}): {exception}")
        return

    if isinstance(exception, ServiceError):
        logger.error(f"{operation} failed: {exception.to_dict()}", exc_info=exception)
    else:
        logger.error(f"{operation} failed with unexpected error: {exception}", exc_info=exception)
