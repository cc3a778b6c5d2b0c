"""FastAPI application entrypoint for hellokit."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hellokit.api.greetings import router as greetings_router
from hellokit.api.resources import router as resources_router
from hellokit.core.config import Settings
from hellokit.core.config import get_settings
from hellokit.core.errors import register_error_handlers
from hellokit.core.logging_config import configure_logging
from hellokit.core.security import FixedWindowRateLimiter
from hellokit.core.security import RateLimitMiddleware
from hellokit.core.security import SecurityHeadersMiddleware
from hellokit.db import models as _models  # noqa: F401

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with middleware, error handlers and routes."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title="hellokit")
    if settings.rate_limit_enabled:
        application.add_middleware(
            RateLimitMiddleware,
            limiter=FixedWindowRateLimiter(
                limit=settings.rate_limit_max,
                window_seconds=settings.rate_limit_window_seconds,
            ),
        )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allowed_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"],
        allow_credentials=True,
        expose_headers=["Content-Length", "RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset"],
        max_age=86400,
    )
    application.add_middleware(SecurityHeadersMiddleware)
    register_error_handlers(application)
    application.include_router(greetings_router)
    application.include_router(resources_router)

    @application.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint for service readiness."""
        return {"status": "ok"}

    logger.info("Application configured with settings=%s", settings.safe_for_logging())
    return application


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("hellokit.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
