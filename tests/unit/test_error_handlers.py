"""Unit tests for shared API error envelope handlers."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.exceptions import HTTPException as StarletteHTTPException

from hellokit.core.config import get_settings
from hellokit.core.errors import ConflictError
from hellokit.core.errors import NotFoundError
from hellokit.core.errors import ValidationFailedError
from hellokit.core.errors import register_error_handlers
from hellokit.schemas.error import ValidationFailure


@pytest.fixture
def production_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("HELLOKIT_ENV", "production")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _build_client() -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/query")
    def query(limit: int) -> dict[str, int]:
        return {"limit": limit}

    @app.get("/not-found")
    def not_found() -> None:
        raise NotFoundError(message="Resource not found")

    @app.get("/conflict")
    def conflict() -> None:
        raise ConflictError(message="Already exists")

    @app.get("/invalid")
    def invalid() -> None:
        raise ValidationFailedError(
            [
                ValidationFailure(field="name", message="Name is required"),
                ValidationFailure(field="email", message="Email is required"),
            ]
        )

    @app.get("/http")
    def http_error() -> None:
        raise StarletteHTTPException(status_code=403, detail="Not allowed here")

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("database exploded")

    return TestClient(app, raise_server_exceptions=False)


def test_request_validation_errors_are_normalized_to_envelope() -> None:
    client = _build_client()

    response = client.get("/query")

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"] == "Validation failed"
    assert payload["errors"][0]["field"] == "limit"
    assert set(payload["errors"][0]) == {"field", "message"}


def test_validation_failures_keep_accumulation_order() -> None:
    client = _build_client()

    response = client.get("/invalid")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Validation failed",
        "errors": [
            {"field": "name", "message": "Name is required"},
            {"field": "email", "message": "Email is required"},
        ],
    }


def test_not_found_errors_use_shared_envelope() -> None:
    client = _build_client()

    response = client.get("/not-found")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found", "message": "Resource not found"}


def test_conflict_errors_use_shared_envelope() -> None:
    client = _build_client()

    response = client.get("/conflict")

    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "Conflict", "message": "Already exists"}


def test_http_errors_are_wrapped_in_shared_envelope() -> None:
    client = _build_client()

    response = client.get("/http")

    assert response.status_code == 403
    assert response.json() == {"success": False, "error": "Forbidden", "message": "Not allowed here"}


def test_unknown_routes_name_the_method_and_path() -> None:
    client = _build_client()

    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found", "message": "Route GET /missing not found"}


def test_unhandled_errors_show_message_outside_production() -> None:
    client = _build_client()

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Internal Server Error",
        "message": "database exploded",
    }


def test_unhandled_errors_are_hidden_in_production(production_env: None) -> None:
    client = _build_client()

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.json()["message"] == "An unexpected error occurred"
