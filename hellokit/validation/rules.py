"""Declarative field rules and the evaluator that applies them.

A rule set is plain immutable data. ``evaluate_rules`` walks it against the
raw request inputs and returns the failures it found together with the
sanitized values of every field that passed. Nothing here raises for bad
input and nothing is kept between calls.

Each field is processed in a fixed order and stops at its first failure::

    presence -> trim -> type and bounds -> pattern -> checks -> escape
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
import html
import re
from typing import Any

from email_validator import EmailNotValidError
from email_validator import validate_email

from hellokit.schemas.error import ValidationFailure

# A check receives the trimmed value and returns a failure message or None.
Check = Callable[[str], str | None]

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
# Longer inputs are out of range for any rule and too long for int().
_MAX_INTEGER_DIGITS = 19


class Source(str, Enum):
    """Where a field is read from on the incoming request."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


class FieldType(str, Enum):
    """Target type a field value is validated and coerced to."""

    STRING = "string"
    INTEGER = "integer"
    EMAIL = "email"


@dataclass(frozen=True)
class FieldRule:
    """Constraints and sanitizers for a single request field."""

    name: str
    source: Source
    field_type: FieldType = FieldType.STRING
    required: bool = False
    message: str = "Invalid value"
    required_message: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    min_value: int | None = None
    max_value: int | None = None
    pattern: str | None = None
    pattern_message: str | None = None
    trim: bool = False
    escape: bool = False
    checks: tuple[Check, ...] = field(default_factory=tuple)


@dataclass
class ValidationOutcome:
    """Failures and sanitized values produced by one evaluation."""

    failures: list[ValidationFailure] = field(default_factory=list)
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class _FieldRejected(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _is_absent(value: Any) -> bool:
    return value is None


def _is_falsy(value: Any) -> bool:
    return value is None or value is False or value == "" or value == 0


def _as_text(rule: FieldRule, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set, bool)):
        raise _FieldRejected(rule.message)
    return str(value)


def _coerce_integer(rule: FieldRule, text: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(text) or len(text.lstrip("+-").lstrip("0")) > _MAX_INTEGER_DIGITS:
        raise _FieldRejected(rule.message)
    number = int(text)
    if rule.min_value is not None and number < rule.min_value:
        raise _FieldRejected(rule.message)
    if rule.max_value is not None and number > rule.max_value:
        raise _FieldRejected(rule.message)
    return number


def _check_length(rule: FieldRule, text: str) -> None:
    if rule.min_length is not None and len(text) < rule.min_length:
        raise _FieldRejected(rule.message)
    if rule.max_length is not None and len(text) > rule.max_length:
        raise _FieldRejected(rule.message)


def normalize_email(address: str) -> str:
    """Validate an address and return its canonical lower-case form.

    Dots and ``+tag`` sub-addresses in the local part are kept as supplied.
    """
    result = validate_email(address, check_deliverability=False)
    return result.normalized.lower()


def _apply_rule(rule: FieldRule, raw: Any) -> Any:
    text = _as_text(rule, raw)
    if rule.trim:
        text = text.strip()

    if rule.field_type is FieldType.INTEGER:
        return _coerce_integer(rule, text)

    _check_length(rule, text)

    if rule.field_type is FieldType.EMAIL:
        try:
            text = normalize_email(text)
        except EmailNotValidError as exc:
            raise _FieldRejected(rule.message) from exc

    if rule.pattern is not None and not re.fullmatch(rule.pattern, text):
        raise _FieldRejected(rule.pattern_message or rule.message)

    for check in rule.checks:
        problem = check(text)
        if problem:
            raise _FieldRejected(problem)

    if rule.escape:
        text = html.escape(text, quote=True)
    return text


def evaluate_rules(rules: Sequence[FieldRule], inputs: Mapping[Source, Mapping[str, Any]]) -> ValidationOutcome:
    """Run every rule against ``inputs`` and collect the outcome.

    ``inputs`` maps each source to the raw values read from it. Rules run in
    order; failures keep that order.
    """
    outcome = ValidationOutcome()
    for rule in rules:
        raw = inputs.get(rule.source, {}).get(rule.name)

        if rule.required and _is_falsy(raw):
            outcome.failures.append(
                ValidationFailure(field=rule.name, message=rule.required_message or f"{rule.name} is required")
            )
            continue
        if _is_absent(raw):
            continue

        try:
            outcome.values[rule.name] = _apply_rule(rule, raw)
        except _FieldRejected as exc:
            outcome.failures.append(ValidationFailure(field=rule.name, message=exc.message))
    return outcome
