"""Greeting routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from hellokit.validation.chains import EVENING_QUERY_RULES
from hellokit.validation.chains import HELLO_QUERY_RULES
from hellokit.validation.middleware import handle_validation_errors
from hellokit.validation.middleware import validate
from hellokit.validation.middleware import validated_values

router = APIRouter(tags=["greetings"])


class GreetingResponse(BaseModel):
    """JSON greeting with the sanitized query echoed back."""

    message: str
    success: bool = True
    query: dict[str, str] | None = None


def _echo(values: dict[str, Any], *names: str) -> dict[str, str] | None:
    echoed = {name: values[name] for name in names if values.get(name)}
    return echoed or None


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Hello world"


@router.get("/evening", response_class=PlainTextResponse)
def evening() -> str:
    return "Good evening"


@router.get(
    "/api/hello",
    response_model=GreetingResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(validate(*HELLO_QUERY_RULES)), Depends(handle_validation_errors)],
)
def hello_endpoint(request: Request) -> GreetingResponse:
    """Greet by name and/or with a custom greeting."""
    values = validated_values(request)
    name = values.get("name")
    greeting = values.get("greeting")

    if name and greeting:
        message = f"{greeting} {name}!"
    elif name:
        message = f"Hello {name}!"
    elif greeting:
        message = f"{greeting} World!"
    else:
        message = "Hello World!"

    return GreetingResponse(message=message, query=_echo(values, "name", "greeting"))


@router.get(
    "/api/evening",
    response_model=GreetingResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(validate(*EVENING_QUERY_RULES)), Depends(handle_validation_errors)],
)
def evening_endpoint(request: Request) -> GreetingResponse:
    """Evening greeting, optionally personalized."""
    values = validated_values(request)
    name = values.get("name")
    message = f"Good Evening {name}!" if name else "Good Evening!"
    return GreetingResponse(message=message, query=_echo(values, "name", "time"))
