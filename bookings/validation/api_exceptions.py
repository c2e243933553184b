"""
Django REST Framework Exception Handler

Keeps DRF's own errors (malformed JSON, throttling, unknown methods...) in
the same shapes the validation pipeline and the error middleware produce.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    Throttled,
    ValidationError as DRFValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .errors import (
    APIError,
    ErrorCode,
    ErrorResponse,
    FieldError,
    ValidationFailure,
    format_validation_errors,
)

logger = logging.getLogger(__name__)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, APIError):
        return Response(exc.to_response().to_dict(), status=exc.status)

    response = exception_handler(exc, context)

    if response is None:
        return None

    if isinstance(exc, (DRFValidationError, ParseError)):
        failure = ValidationFailure(errors=tuple(_extract_field_errors(exc)))
        return Response(failure.to_dict(), status=failure.status, headers=_copy_headers(response))

    error_response = _convert_to_standard_format(exc)
    return Response(error_response.to_dict(), status=response.status_code, headers=_copy_headers(response))


def _convert_to_standard_format(exc: Exception) -> ErrorResponse:
    if isinstance(exc, NotAuthenticated):
        return ErrorResponse(
            message="Authentication required. Please log in.",
            code=ErrorCode.AUTHENTICATION_REQUIRED.value,
        )

    if isinstance(exc, AuthenticationFailed):
        return ErrorResponse(
            message=str(exc.detail) if exc.detail else "Authentication failed.",
            code=ErrorCode.AUTHENTICATION_FAILED.value,
        )

    if isinstance(exc, PermissionDenied):
        return ErrorResponse(
            message=str(exc.detail) if exc.detail else "You do not have permission to perform this action.",
            code=ErrorCode.PERMISSION_DENIED.value,
        )

    if isinstance(exc, NotFound):
        return ErrorResponse(
            message=str(exc.detail) if exc.detail else "Resource not found.",
            code=ErrorCode.RESOURCE_NOT_FOUND.value,
        )

    if isinstance(exc, MethodNotAllowed):
        return ErrorResponse(
            message=str(exc.detail),
            code=ErrorCode.METHOD_NOT_ALLOWED.value,
        )

    if isinstance(exc, Throttled):
        wait = exc.wait
        logger.warning("Rate limit exceeded (retry in %s seconds)", wait)
        if wait:
            message = f"Too many requests, please try again in {int(wait)} seconds."
        else:
            message = "Too many requests, please try again later."
        return ErrorResponse(
            message=message,
            code=ErrorCode.RATE_LIMITED.value,
            extra={"retryAfter": int(wait)} if wait else None,
        )

    if isinstance(exc, APIException):
        return ErrorResponse(
            message=str(exc.detail) if exc.detail else "An error occurred.",
            code=ErrorCode.INTERNAL_ERROR.value,
        )

    return ErrorResponse(message="An unexpected error occurred.")


def _extract_field_errors(exc: APIException) -> List[FieldError]:
    if isinstance(exc, ParseError):
        return [FieldError(field="body", message=str(exc.detail))]
    return format_validation_errors(exc.detail) or [
        FieldError(field="__all__", message="Invalid input.")
    ]


def _copy_headers(response: Response) -> Dict[str, str]:
    return {key: value for key, value in response.items() if key in ("Retry-After", "Allow", "WWW-Authenticate")}
