"""Rate limiting and security response headers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import math
import time

from fastapi import Request
from fastapi import Response
from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from hellokit.core.errors import build_error_response

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "You have exceeded the maximum number of allowed requests. Please try again later."
RATE_LIMIT_EXEMPT_PATHS = frozenset({"/health", "/healthz"})

# Sweep expired windows once the table grows past this many clients.
_SWEEP_THRESHOLD = 10_000

SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self'; style-src 'self'; img-src 'self' data:; "
        "font-src 'self'; object-src 'none'; base-uri 'self'; form-action 'self'; "
        "frame-ancestors 'self'; upgrade-insecure-requests; block-all-mixed-content"
    ),
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Embedder-Policy": "require-corp",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
}


@dataclass
class RateLimitResult:
    """Outcome of counting one request against its client's window."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: int

    def to_headers(self) -> dict[str, str]:
        """Convert the result to standard RateLimit headers."""
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(max(0, self.remaining)),
            "RateLimit-Reset": str(self.reset_after),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_after)
        return headers


class FixedWindowRateLimiter:
    """In-memory fixed-window request counter keyed by client."""

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = max(1, window_seconds)
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and report whether it is allowed."""
        now = self._clock()
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count)
        if len(self._windows) > _SWEEP_THRESHOLD:
            self._sweep(now)

        reset_after = max(1, math.ceil(started + self.window_seconds - now))
        return RateLimitResult(
            allowed=count <= self.limit,
            limit=self.limit,
            remaining=self.limit - count,
            reset_after=reset_after,
        )

    def _sweep(self, now: float) -> None:
        expired = [key for key, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            self._windows.pop(key, None)


def client_key(request: Request) -> str:
    """Identify the caller by address, falling back to X-Forwarded-For."""
    if request.client and request.client.host:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for", "")
    return forwarded.split(",")[0].strip() or "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients that exceed their request budget with a 429 envelope."""

    def __init__(self, app, limiter: FixedWindowRateLimiter, exempt_paths: frozenset[str] = RATE_LIMIT_EXEMPT_PATHS):
        super().__init__(app)
        self.limiter = limiter
        self.exempt_paths = exempt_paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        key = client_key(request)
        result = self.limiter.hit(key)
        if not result.allowed:
            logger.warning("Rate limit exceeded for client=%s path=%s", key, request.url.path)
            return build_error_response(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                error="Too Many Requests",
                message=RATE_LIMIT_MESSAGE,
                headers=result.to_headers(),
            )

        response = await call_next(request)
        response.headers.update(result.to_headers())
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach hardening headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
