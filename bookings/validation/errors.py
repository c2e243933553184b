"""
Standardized Error Handling

Provides consistent error formats:
Validation: { success: false, message: "Validation failed", errors: [{ field, message }] }
Other API errors: { success: false, message, code }

HTTP Status Code Standards:
- 400: Bad Request (validation errors, malformed input)
- 401: Unauthorized (not authenticated)
- 403: Forbidden (not permitted)
- 404: Not Found
- 405: Method Not Allowed
- 413: Payload Too Large
- 429: Too Many Requests (rate limited)
- 500: Internal Server Error
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from django.http import JsonResponse


VALIDATION_FAILED_MESSAGE = "Validation failed"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"

    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "field": self.field,
            "message": self.message,
        }


@dataclass
class ValidationOutcome:
    """Ordered failures collected by one rule-chain run."""

    errors: List[FieldError] = field(default_factory=list)

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field=field_name, message=message))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_list(self) -> List[Dict[str, str]]:
        return [error.to_dict() for error in self.errors]

    def __len__(self) -> int:
        return len(self.errors)


@dataclass(frozen=True)
class ValidationFailure:
    """
    Rejection produced when a request breaks one or more field rules.

    Returned as data by the aggregator; never raised.
    """

    errors: Tuple[FieldError, ...]
    message: str = VALIDATION_FAILED_MESSAGE
    status: int = 400

    def __post_init__(self):
        if not self.errors:
            raise ValueError("ValidationFailure requires at least one field error")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "errors": [error.to_dict() for error in self.errors],
        }

    def to_json_response(self) -> JsonResponse:
        return JsonResponse(self.to_dict(), status=self.status)


@dataclass
class ErrorResponse:
    message: str
    code: str = ErrorCode.INTERNAL_ERROR.value
    extra: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.extra:
            result.update(self.extra)
        return result

    def to_json_response(self, status: int = 400) -> JsonResponse:
        return JsonResponse(self.to_dict(), status=status)


class APIError(Exception):
    def __init__(
        self,
        code: Union[ErrorCode, str],
        message: str,
        status: int = 400,
    ):
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.message = message
        self.status = status
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(message=self.message, code=self.code)

    def to_json_response(self) -> JsonResponse:
        return self.to_response().to_json_response(self.status)


class NotFoundError(APIError):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=message,
            status=404,
        )


def format_validation_errors(
    errors: Any,
    prefix: str = "",
) -> List[FieldError]:
    """Flatten a nested ``{field: [messages]}`` mapping into field errors."""
    field_errors = []

    if isinstance(errors, dict):
        for field_name, error_list in errors.items():
            full_field = f"{prefix}{field_name}"
            if isinstance(error_list, (dict, list)):
                field_errors.extend(format_validation_errors(error_list, f"{full_field}."))
            else:
                field_errors.append(FieldError(field=full_field, message=str(error_list)))
    elif isinstance(errors, list):
        for error in errors:
            if isinstance(error, (dict, list)):
                field_errors.extend(format_validation_errors(error, prefix))
            else:
                field_errors.append(FieldError(
                    field=prefix.rstrip(".") or "__all__",
                    message=str(error),
                ))
    else:
        field_errors.append(FieldError(field=prefix.rstrip(".") or "__all__", message=str(errors)))

    return field_errors


def create_success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    response: Dict[str, Any] = {"success": True}
    if message:
        response["message"] = message
    if data is not None:
        response["data"] = data
    return response
