"""Request-scoped validation units for FastAPI routes.

Routes list these as path dependencies, in order::

    dependencies=[Depends(validate(*RULES)), Depends(handle_validation_errors)]

``validate`` only records failures on ``request.state``; the result handler
is the single place that turns them into a 400 response.
"""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Mapping
from typing import Any

from fastapi import Request

from hellokit.core.errors import ValidationFailedError
from hellokit.schemas.error import ValidationFailure
from hellokit.validation.rules import FieldRule
from hellokit.validation.rules import Source
from hellokit.validation.rules import evaluate_rules

ERRORS_STATE_KEY = "validation_errors"
VALUES_STATE_KEY = "validated"


async def _read_body(request: Request) -> Mapping[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        return {}
    if not isinstance(payload, dict):
        return {}
    return payload


async def collect_inputs(request: Request, sources: set[Source]) -> dict[Source, Mapping[str, Any]]:
    """Read the raw values of every requested source."""
    inputs: dict[Source, Mapping[str, Any]] = {}
    if Source.PATH in sources:
        inputs[Source.PATH] = dict(request.path_params)
    if Source.QUERY in sources:
        inputs[Source.QUERY] = dict(request.query_params)
    if Source.BODY in sources:
        inputs[Source.BODY] = await _read_body(request)
    return inputs


def validation_errors(request: Request) -> list[ValidationFailure]:
    """Return the request's failure accumulator, creating it when missing."""
    failures = getattr(request.state, ERRORS_STATE_KEY, None)
    if failures is None:
        failures = []
        setattr(request.state, ERRORS_STATE_KEY, failures)
    return failures


def validated_values(request: Request) -> dict[str, Any]:
    """Return sanitized values recorded by earlier validation units."""
    values = getattr(request.state, VALUES_STATE_KEY, None)
    if values is None:
        values = {}
        setattr(request.state, VALUES_STATE_KEY, values)
    return values


def validate(*rules: FieldRule) -> Callable[[Request], Awaitable[None]]:
    """Build a dependency that evaluates ``rules`` against the request."""
    sources = {rule.source for rule in rules}

    async def run_rules(request: Request) -> None:
        inputs = await collect_inputs(request, sources)
        outcome = evaluate_rules(rules, inputs)
        validation_errors(request).extend(outcome.failures)
        validated_values(request).update(outcome.values)

    return run_rules


async def handle_validation_errors(request: Request) -> None:
    """Stop the request with a 400 envelope if any failure was recorded."""
    failures = getattr(request.state, ERRORS_STATE_KEY, None)
    if failures:
        raise ValidationFailedError(failures)
