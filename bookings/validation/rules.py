"""
Rule Chain

Evaluates an ordered list of field rules against one request.

Every rule runs; a failing rule records its message and the chain moves on,
so callers see every violation in a single round trip. Checks may normalize
values (trim, case-fold, coerce), and the normalized value is what later
rules and the route handler see.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional

from .errors import ValidationOutcome

LOCATIONS = ("body", "query", "path")

_MISSING = object()


class CheckFailed(ValueError):
    """Raised by a check when the value does not satisfy it."""


Check = Callable[..., Any]


@dataclass(frozen=True)
class FieldRule:
    field: str
    check: Check
    message: str
    optional: bool = False
    cross_field: bool = False

    def __post_init__(self):
        location = self.field.split(".", 1)[0]
        if location not in LOCATIONS or "." not in self.field:
            raise ValueError(
                f"Rule field must be qualified with one of {', '.join(LOCATIONS)}: {self.field!r}"
            )

    def describe(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "message": self.message,
            "optional": self.optional,
        }


def rule(
    field_name: str,
    check: Check,
    message: str,
    optional: bool = False,
    cross_field: bool = False,
) -> FieldRule:
    return FieldRule(
        field=field_name,
        check=check,
        message=message,
        optional=optional,
        cross_field=cross_field,
    )


@dataclass
class RequestData:
    """Structured request values split into body, query and path namespaces."""

    body: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    path: Dict[str, Any] = field(default_factory=dict)

    def _resolve(self, qualified: str):
        location, _, dotted = qualified.partition(".")
        if location not in LOCATIONS:
            raise KeyError(qualified)
        container = getattr(self, location)
        keys = dotted.split(".")
        for key in keys[:-1]:
            if not isinstance(container, dict):
                return None, keys[-1]
            container = container.get(key)
        if not isinstance(container, dict):
            return None, keys[-1]
        return container, keys[-1]

    def _lookup(self, qualified: str) -> Any:
        container, key = self._resolve(qualified)
        if container is None:
            return _MISSING
        return container.get(key, _MISSING)

    def has(self, qualified: str) -> bool:
        return self._lookup(qualified) is not _MISSING

    def get(self, qualified: str, default: Any = None) -> Any:
        value = self._lookup(qualified)
        return default if value is _MISSING else value

    def set(self, qualified: str, value: Any) -> None:
        container, key = self._resolve(qualified)
        if container is None:
            raise KeyError(f"Cannot set {qualified!r}: parent is not an object")
        container[key] = value

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {"body": self.body, "query": self.query, "path": self.path}


def is_empty(value: Any) -> bool:
    return value is _MISSING or value is None or value == ""


def run_rule_chain(
    request: RequestData,
    rules: Iterable[FieldRule],
    outcome: Optional[ValidationOutcome] = None,
) -> ValidationOutcome:
    outcome = outcome if outcome is not None else ValidationOutcome()

    for field_rule in rules:
        current = request._lookup(field_rule.field)

        if field_rule.optional and is_empty(current):
            continue

        value = None if current is _MISSING else current
        try:
            if field_rule.cross_field:
                result = field_rule.check(value, request)
            else:
                result = field_rule.check(value)
        except CheckFailed:
            outcome.add(field_rule.field, field_rule.message)
            continue

        if current is not _MISSING:
            if result is not current:
                request.set(field_rule.field, result)
        elif result is not None and request._resolve(field_rule.field)[0] is not None:
            # defaults only land where the parent object exists
            request.set(field_rule.field, result)

    return outcome
