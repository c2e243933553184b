"""
Result Aggregator

Turns a ValidationOutcome into the terminal decision for a request:
``None`` means proceed to the handler, a ``ValidationFailure`` means reject
with HTTP 400. Pure and idempotent; performs no I/O.
"""

from __future__ import annotations

from itertools import chain
from typing import Iterable, Optional

from .errors import ValidationFailure, ValidationOutcome
from .rules import FieldRule, RequestData, run_rule_chain


def aggregate(outcome: ValidationOutcome) -> Optional[ValidationFailure]:
    if outcome.is_valid:
        return None
    return ValidationFailure(errors=tuple(outcome.errors))


def validate(
    request: RequestData,
    *rule_sets: Iterable[FieldRule],
) -> Optional[ValidationFailure]:
    """Run every rule set against ``request`` in order, then aggregate."""
    outcome = run_rule_chain(request, chain.from_iterable(rule_sets))
    return aggregate(outcome)
