"""Unit tests for rate limiting and security headers."""

from __future__ import annotations

from dataclasses import replace

from fastapi.testclient import TestClient

from hellokit.core.config import get_settings
from hellokit.core.security import RATE_LIMIT_MESSAGE
from hellokit.core.security import SECURITY_HEADERS
from hellokit.core.security import FixedWindowRateLimiter
from hellokit.main import create_app


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _client(**overrides) -> TestClient:
    settings = replace(get_settings(), **overrides)
    return TestClient(create_app(settings))


def test_limiter_counts_within_window_and_resets_after() -> None:
    clock = _FakeClock()
    limiter = FixedWindowRateLimiter(limit=2, window_seconds=60, clock=clock)

    first = limiter.hit("10.0.0.1")
    second = limiter.hit("10.0.0.1")
    third = limiter.hit("10.0.0.1")

    assert (first.allowed, first.remaining) == (True, 1)
    assert (second.allowed, second.remaining) == (True, 0)
    assert third.allowed is False
    assert third.to_headers()["Retry-After"] == "60"

    clock.now += 60
    assert limiter.hit("10.0.0.1").allowed is True


def test_limiter_keeps_clients_apart() -> None:
    limiter = FixedWindowRateLimiter(limit=1, window_seconds=60, clock=_FakeClock())

    assert limiter.hit("10.0.0.1").allowed is True
    assert limiter.hit("10.0.0.2").allowed is True
    assert limiter.hit("10.0.0.1").allowed is False


def test_requests_over_budget_get_429_envelope() -> None:
    client = _client(rate_limit_max=2, rate_limit_window_seconds=60)

    assert client.get("/api/hello").status_code == 200
    second = client.get("/api/hello")
    assert second.headers["RateLimit-Limit"] == "2"
    assert second.headers["RateLimit-Remaining"] == "0"

    response = client.get("/api/hello")

    assert response.status_code == 429
    assert response.json() == {
        "success": False,
        "error": "Too Many Requests",
        "message": RATE_LIMIT_MESSAGE,
    }
    assert int(response.headers["Retry-After"]) >= 1


def test_health_is_exempt_from_rate_limit() -> None:
    client = _client(rate_limit_max=1, rate_limit_window_seconds=60)

    for _ in range(3):
        assert client.get("/health").status_code == 200


def test_rate_limit_can_be_disabled() -> None:
    client = _client(rate_limit_enabled=False, rate_limit_max=1)

    for _ in range(3):
        response = client.get("/api/hello")
        assert response.status_code == 200
        assert "RateLimit-Limit" not in response.headers


def test_security_headers_on_every_response() -> None:
    client = _client(rate_limit_max=1, rate_limit_window_seconds=60)

    ok = client.get("/")
    limited = client.get("/")
    exempt = client.get("/health")

    assert limited.status_code == 429
    for response in (ok, limited, exempt):
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value
