"""
Error Handling Middleware

Catches exceptions escaping views and returns standardized JSON errors for
API requests, so no API caller ever receives an HTML traceback.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError as DjangoValidationError
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse

from .errors import (
    APIError,
    ErrorCode,
    ErrorResponse,
    FieldError,
    ValidationFailure,
    format_validation_errors,
)

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware:
    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(self, request: HttpRequest, exc: Exception) -> Optional[HttpResponse]:
        return self.handle_exception(request, exc)

    def handle_exception(self, request: HttpRequest, exc: Exception) -> Optional[HttpResponse]:
        if not self._is_api_request(request):
            return None

        request_id = getattr(request, "request_id", None) or str(uuid.uuid4())

        if isinstance(exc, APIError):
            return exc.to_json_response()

        if isinstance(exc, Http404):
            return self._create_json_error(
                ErrorCode.RESOURCE_NOT_FOUND,
                str(exc) or "Resource not found",
                404,
            )

        if isinstance(exc, PermissionDenied):
            return self._create_json_error(
                ErrorCode.PERMISSION_DENIED,
                str(exc) or "Permission denied",
                403,
            )

        if isinstance(exc, DjangoValidationError):
            if hasattr(exc, "message_dict"):
                field_errors = format_validation_errors(exc.message_dict)
            else:
                field_errors = [FieldError(field="__all__", message=message) for message in exc.messages]
            return ValidationFailure(errors=tuple(field_errors)).to_json_response()

        logger.exception(
            "Unhandled exception [request_id=%s]: %s",
            request_id,
            exc,
            extra={"request_id": request_id},
        )

        message = "Something went wrong! Please try again later."
        if settings.DEBUG:
            message = f"{type(exc).__name__}: {exc}"

        return self._create_json_error(ErrorCode.INTERNAL_ERROR, message, 500)

    def _is_api_request(self, request: HttpRequest) -> bool:
        if request.path.startswith("/api/"):
            return True

        content_type = request.content_type or ""
        if "application/json" in content_type:
            return True

        accept = request.headers.get("Accept", "")
        if "application/json" in accept:
            return True

        return request.headers.get("X-Requested-With") == "XMLHttpRequest"

    def _create_json_error(
        self,
        code: ErrorCode,
        message: str,
        status: int,
    ) -> JsonResponse:
        return ErrorResponse(message=message, code=code.value).to_json_response(status)
