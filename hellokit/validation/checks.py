"""Content checks for free-text request fields."""

from __future__ import annotations

import re

SQL_INJECTION_PATTERN = re.compile(
    r"(\b(SELECT|INSERT|UPDATE|DELETE|DROP|UNION|ALTER|CREATE|EXEC|EXECUTE)\b)|(--)|(;)|(')|(\")",
    re.IGNORECASE,
)
XSS_PAYLOAD_PATTERN = re.compile(r"<script\b[^>]*>[\s\S]*?</script>|javascript:|on\w+\s*=", re.IGNORECASE)
PATH_TRAVERSAL_PATTERN = re.compile(r"\.\./")


def check_sql_injection(value: str) -> str | None:
    if SQL_INJECTION_PATTERN.search(value):
        return "Potentially malicious input detected"
    return None


def check_xss_payload(value: str) -> str | None:
    if XSS_PAYLOAD_PATTERN.search(value):
        return "Invalid characters in input"
    return None


def check_path_traversal(value: str) -> str | None:
    if PATH_TRAVERSAL_PATTERN.search(value):
        return "Invalid path characters detected"
    return None
