"""
View integration for the validation pipeline.

``validate_request`` wraps a DRF function view: it builds a RequestData from
the incoming request, runs the declared rule sets, and either answers 400
with the validation payload or calls the view with the normalized values.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Dict, Iterable

from django.http import QueryDict
from rest_framework.request import Request
from rest_framework.response import Response

from .aggregator import validate
from .rules import FieldRule, RequestData

logger = logging.getLogger(__name__)


def sanitize_input(values: Dict[str, Any]) -> Dict[str, Any]:
    """Trim every top-level string value in place."""
    for key, value in values.items():
        if isinstance(value, str):
            values[key] = value.strip()
    return values


def build_request_data(request: Request, path_kwargs: Dict[str, Any]) -> RequestData:
    data = request.data
    if isinstance(data, QueryDict):
        body = data.dict()
    elif isinstance(data, dict):
        body = data
    else:
        body = {}
    return RequestData(
        body=body,
        query=request.query_params.dict(),
        path=path_kwargs,
    )


def validate_request(*rule_sets: Iterable[FieldRule], sanitize: bool = False) -> Callable:
    """
    Run ``rule_sets`` before the wrapped view.

    Rejected requests never reach the view. Accepted requests reach it with
    ``request.validated`` holding the normalized RequestData and path kwargs
    replaced by their normalized values.
    """
    rules = tuple(rule for rule_set in rule_sets for rule in rule_set)

    def decorator(view_func: Callable) -> Callable:
        @wraps(view_func)
        def wrapper(request: Request, *args, **kwargs):
            request_data = build_request_data(request, kwargs)
            if sanitize:
                sanitize_input(request_data.body)
                sanitize_input(request_data.query)

            failure = validate(request_data, rules)
            if failure is not None:
                logger.info(
                    "Validation failed for %s %s: %d error(s)",
                    request.method,
                    request.path,
                    len(failure.errors),
                )
                return Response(failure.to_dict(), status=failure.status)

            request.validated = request_data
            return view_func(request, *args, **request_data.path)
        return wrapper
    return decorator
