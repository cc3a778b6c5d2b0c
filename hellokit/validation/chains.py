"""Rule sets attached to the API routes."""

from __future__ import annotations

from hellokit.validation.checks import check_path_traversal
from hellokit.validation.checks import check_sql_injection
from hellokit.validation.checks import check_xss_payload
from hellokit.validation.rules import FieldRule
from hellokit.validation.rules import FieldType
from hellokit.validation.rules import Source

# Largest value a signed 64-bit SQL integer column or OFFSET accepts.
SQL_INTEGER_MAX = 2**63 - 1
MAX_LIMIT = 100

IDENTIFIER_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        name="id",
        source=Source.PATH,
        field_type=FieldType.INTEGER,
        required=True,
        required_message="ID parameter is required",
        min_value=1,
        max_value=SQL_INTEGER_MAX,
        message="ID must be a positive integer",
    ),
)

USER_ENTITY_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        name="name",
        source=Source.BODY,
        required=True,
        required_message="Name is required",
        trim=True,
        min_length=2,
        max_length=50,
        message="Name must be between 2 and 50 characters",
        escape=True,
    ),
    FieldRule(
        name="email",
        source=Source.BODY,
        field_type=FieldType.EMAIL,
        required=True,
        required_message="Email is required",
        message="Valid email address is required",
    ),
)

PAGINATION_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        name="page",
        source=Source.QUERY,
        field_type=FieldType.INTEGER,
        min_value=1,
        # (page - 1) * limit must stay a valid OFFSET.
        max_value=SQL_INTEGER_MAX // MAX_LIMIT,
        message="Page must be a positive integer",
    ),
    FieldRule(
        name="limit",
        source=Source.QUERY,
        field_type=FieldType.INTEGER,
        min_value=1,
        max_value=MAX_LIMIT,
        message="Limit must be an integer between 1 and 100",
    ),
)

_GREETING_NAME = FieldRule(
    name="name",
    source=Source.QUERY,
    trim=True,
    min_length=1,
    max_length=100,
    message="Name must be between 1 and 100 characters",
    pattern=r"[A-Za-z0-9 \-]+",
    pattern_message="Name must contain only letters, numbers, spaces, or hyphens",
    checks=(check_sql_injection, check_xss_payload),
    escape=True,
)

HELLO_QUERY_RULES: tuple[FieldRule, ...] = (
    _GREETING_NAME,
    FieldRule(
        name="greeting",
        source=Source.QUERY,
        trim=True,
        max_length=200,
        message="Greeting must not exceed 200 characters",
        checks=(check_sql_injection, check_xss_payload, check_path_traversal),
        escape=True,
    ),
)

EVENING_QUERY_RULES: tuple[FieldRule, ...] = (
    _GREETING_NAME,
    FieldRule(
        name="time",
        source=Source.QUERY,
        trim=True,
        pattern=r"([01]?[0-9]|2[0-3]):[0-5][0-9]",
        message="Time must be in HH:MM format (24-hour)",
        checks=(check_sql_injection,),
        escape=True,
    ),
)
