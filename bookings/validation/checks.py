"""
Field checks used by rule chains.

Each factory returns a callable that takes the current field value and
returns the value to keep, raising ``CheckFailed`` when the value is not
acceptable. Cross-field checks also receive the whole ``RequestData``.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timezone as dt_timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import EmailValidator, URLValidator
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .rules import Check, CheckFailed, RequestData

CUID_PATTERN = re.compile(r"c[^\s-]{8,}", re.IGNORECASE)
UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)
TIME_PATTERN = re.compile(r"([0-1]?[0-9]|2[0-3]):[0-5][0-9]")
PASSWORD_COMPOSITION = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")

_email_validator = EmailValidator()
_url_validator = URLValidator()


def compose(*checks: Check) -> Check:
    """Fold several single-value checks into one, applied left to right."""
    def check(value):
        for inner in checks:
            value = inner(value)
        return value
    return check


def required(value):
    if value is None or value == "" or value == [] or value == {}:
        raise CheckFailed("required")
    return value


def is_string(value):
    if not isinstance(value, str):
        raise CheckFailed("not a string")
    return value


def trimmed(value):
    return is_string(value).strip()


def lowercased(value):
    return is_string(value).lower()


def length(min_length: Optional[int] = None, max_length: Optional[int] = None) -> Check:
    def check(value):
        size = len(is_string(value))
        if min_length is not None and size < min_length:
            raise CheckFailed("too short")
        if max_length is not None and size > max_length:
            raise CheckFailed("too long")
        return value
    return check


def exact_length(size: int) -> Check:
    return length(size, size)


def trimmed_length(min_length: Optional[int] = None, max_length: Optional[int] = None) -> Check:
    return compose(trimmed, length(min_length, max_length))


def matches(pattern: str, flags: int = 0) -> Check:
    compiled = re.compile(pattern, flags)

    def check(value):
        if not compiled.search(is_string(value)):
            raise CheckFailed("pattern mismatch")
        return value
    return check


def is_email(value):
    try:
        _email_validator(is_string(value))
    except DjangoValidationError as exc:
        raise CheckFailed("invalid email") from exc
    return value


def normalized_email(value):
    """Trim, lower-case and validate an email address."""
    return is_email(trimmed(value).lower())


def strong_password(min_length: int = 8) -> Check:
    def check(value):
        value = is_string(value)
        if len(value) < min_length or not PASSWORD_COMPOSITION.match(value):
            raise CheckFailed("weak password")
        return value
    return check


def is_cuid(value):
    if not CUID_PATTERN.fullmatch(is_string(value)):
        raise CheckFailed("not a cuid")
    return value


def is_uuid(value):
    if not UUID_PATTERN.fullmatch(is_string(value)):
        raise CheckFailed("not a uuid")
    return value


def integer(min_value: Optional[int] = None, max_value: Optional[int] = None) -> Check:
    """Accept ints and digit strings; the field becomes an int."""
    def check(value):
        if isinstance(value, bool):
            raise CheckFailed("not an integer")
        if isinstance(value, str):
            text = value.strip()
            if not re.fullmatch(r"[+-]?\d+", text):
                raise CheckFailed("not an integer")
            try:
                value = int(text)
            except ValueError as exc:
                # interpreter caps digit-string conversion length
                raise CheckFailed("not an integer") from exc
        elif isinstance(value, float) and value.is_integer():
            value = int(value)
        elif not isinstance(value, int):
            raise CheckFailed("not an integer")
        if min_value is not None and value < min_value:
            raise CheckFailed("below minimum")
        if max_value is not None and value > max_value:
            raise CheckFailed("above maximum")
        return value
    return check


def number(min_value: Optional[float] = None, max_value: Optional[float] = None) -> Check:
    """Accept ints, floats and numeric strings; strings become Decimal."""
    def check(value):
        if isinstance(value, bool) or value is None:
            raise CheckFailed("not a number")
        if isinstance(value, str):
            try:
                value = Decimal(value.strip())
            except InvalidOperation as exc:
                raise CheckFailed("not a number") from exc
            if not value.is_finite():
                raise CheckFailed("not a number")
        elif not isinstance(value, (int, float, Decimal)):
            raise CheckFailed("not a number")
        if min_value is not None and value < min_value:
            raise CheckFailed("below minimum")
        if max_value is not None and value > max_value:
            raise CheckFailed("above maximum")
        return value
    return check


def boolean(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise CheckFailed("not a boolean")


def one_of(choices: Iterable[Any]) -> Check:
    allowed = tuple(choices)

    def check(value):
        if value not in allowed:
            raise CheckFailed("not an allowed value")
        return value
    check.choices = allowed
    return check


def iso_datetime(value):
    """Accept ISO-8601 dates or datetimes; the string is kept as sent."""
    text = is_string(value)
    try:
        parsed = parse_datetime(text) or parse_date(text)
    except ValueError as exc:
        raise CheckFailed("invalid date") from exc
    if parsed is None:
        raise CheckFailed("invalid date")
    return value


def time_of_day(value):
    if not TIME_PATTERN.fullmatch(is_string(value)):
        raise CheckFailed("invalid time")
    return value


def is_url(value):
    try:
        _url_validator(is_string(value))
    except DjangoValidationError as exc:
        raise CheckFailed("invalid url") from exc
    return value


def list_of(
    item_check: Optional[Check] = None,
    max_items: Optional[int] = None,
    min_items: Optional[int] = None,
) -> Check:
    def check(value):
        if not isinstance(value, list):
            raise CheckFailed("not a list")
        if min_items is not None and len(value) < min_items:
            raise CheckFailed("too few items")
        if max_items is not None and len(value) > max_items:
            raise CheckFailed("too many items")
        if item_check is None:
            return value
        return [item_check(item) for item in value]
    return check


def is_object(value):
    if not isinstance(value, dict):
        raise CheckFailed("not an object")
    return value


def optional(inner: Check) -> Check:
    """Let None and "" through untouched; otherwise apply ``inner``."""
    def check(value):
        if value is None or value == "":
            return value
        return inner(value)
    return check


def record(fields: Dict[str, Check]) -> Check:
    """
    Check a nested object key by key.

    Keys whose check returns None stay absent. Unknown keys are kept.
    """
    def check(value):
        checked = dict(is_object(value))
        for key, field_check in fields.items():
            result = field_check(checked.get(key))
            if key in checked or result is not None:
                checked[key] = result
        return checked
    return check


def default(fallback: Any) -> Check:
    """Supply ``fallback`` when the field is absent or empty."""
    def check(value):
        if value is None or value == "":
            return fallback
        return value
    return check


def same_as(other_field: str) -> Callable[[Any, RequestData], Any]:
    def check(value, request: RequestData):
        if value != request.get(other_field):
            raise CheckFailed("mismatch")
        return value
    return check


def after(other_field: str) -> Callable[[Any, RequestData], Any]:
    """
    Datetime ordering against a sibling field.

    Naive values are read as UTC so mixed offsets still compare. Skipped when
    either side does not parse; the format rules report that.
    """
    def check(value, request: RequestData):
        end = _parse_moment(value)
        start = _parse_moment(request.get(other_field))
        if end is None or start is None:
            return value
        if end <= start:
            raise CheckFailed("not after")
        return value
    return check


def required_when(other_field: str, expected: Any) -> Callable[[Any, RequestData], Any]:
    def check(value, request: RequestData):
        if request.get(other_field) == expected and (value is None or value == ""):
            raise CheckFailed("required")
        return value
    return check


def when_present(parent_field: str, inner: Check) -> Callable[[Any, RequestData], Any]:
    """Apply ``inner`` only when ``parent_field`` was sent."""
    def check(value, request: RequestData):
        if not request.has(parent_field):
            return value
        return inner(value)
    return check


def choices_of(check: Check) -> Sequence[Any]:
    return getattr(check, "choices", ())


def _parse_moment(value):
    if not isinstance(value, str):
        return None
    try:
        moment = parse_datetime(value)
        if moment is None:
            day = parse_date(value)
            moment = datetime.combine(day, time.min) if day is not None else None
    except ValueError:
        return None
    if moment is not None and timezone.is_naive(moment):
        moment = timezone.make_aware(moment, dt_timezone.utc)
    return moment
