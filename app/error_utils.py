"""
Error handling utilities for consistent logging and error management.

API endpoints log failures with structured context and answer with a
sanitized JSON body so internal details (and never the signing secret) reach
the client.
"""

import logging
import sys
from typing import Any

from flask import g, has_request_context


def safe_log_error(
    logger: logging.Logger,
    message: str,
    exc_info: bool | BaseException | tuple | None = True,
    level: int = logging.ERROR,
    **extra_context: Any,
) -> None:
    """
    Log an error with structured context and exception information.

    Args:
        logger: The logger instance to use
        message: Human-readable error message
        exc_info: Exception info (True for current exception, exception object, or tuple)
        level: Log level (default: ERROR)
        **extra_context: Additional context fields to include in the log

    Example:
        try:
            signer.get_signed_url(path)
        except HashingError as e:
            safe_log_error(logger, "Signing failed", exc_info=e, path=path)
    """
    context = {"error_context": extra_context, "has_exception": exc_info is not None}

    if exc_info:
        if isinstance(exc_info, BaseException):
            context["exception_type"] = type(exc_info).__name__
            context["exception_message"] = str(exc_info)
        elif exc_info is True:
            exc_type, exc_value, _ = sys.exc_info()
            if exc_type:
                context["exception_type"] = exc_type.__name__
                context["exception_message"] = str(exc_value)

    if has_request_context() and hasattr(g, "request_id"):
        context["request_id"] = g.request_id

    logger.log(level, message, exc_info=exc_info, extra=context)


def handle_api_exception(
    logger: logging.Logger,
    message: str,
    status_code: int = 500,
    public_message: str | None = None,
    **extra_context: Any,
) -> tuple[dict[str, Any], int]:
    """
    Handle an exception in an API endpoint with logging and JSON response.

    Args:
        logger: The logger instance to use
        message: Internal error message for logs
        status_code: HTTP status code to return
        public_message: User-facing error message (defaults to generic message)
        **extra_context: Additional context for logging

    Returns:
        Tuple of (JSON response dict, status code)

    Example:
        try:
            url = current_signer().get_signed_url(path)
        except Exception:
            body, status = handle_api_exception(
                current_app.logger,
                "sign-url error",
                public_message="Failed to generate signed URL",
                path=path,
            )
            return jsonify(body), status
    """
    safe_log_error(logger, message, exc_info=True, **extra_context)

    if public_message is None:
        if status_code >= 500:
            public_message = "An internal error occurred. Please try again later."
        elif status_code >= 400:
            public_message = "The request could not be completed."
        else:
            public_message = "An error occurred."

    return {"error": public_message}, status_code
