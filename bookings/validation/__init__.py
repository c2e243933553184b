"""
Centralized Validation Module

Request validation and error normalization for the API layer.
Server is authoritative; client mirrors constraints for UX.

Pipeline:
- Rule Chain: ordered field rules evaluated against body/query/path values
- Result Aggregator: turns collected failures into proceed or a 400 payload
"""

from .aggregator import aggregate, validate
from .decorators import validate_request
from .errors import (
    APIError,
    ErrorCode,
    ErrorResponse,
    FieldError,
    NotFoundError,
    ValidationFailure,
    ValidationOutcome,
)
from .rules import CheckFailed, FieldRule, RequestData, rule, run_rule_chain

__all__ = [
    "aggregate",
    "validate",
    "validate_request",
    "APIError",
    "ErrorCode",
    "ErrorResponse",
    "FieldError",
    "NotFoundError",
    "ValidationFailure",
    "ValidationOutcome",
    "CheckFailed",
    "FieldRule",
    "RequestData",
    "rule",
    "run_rule_chain",
]
