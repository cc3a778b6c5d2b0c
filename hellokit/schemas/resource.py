"""Pydantic schemas for resource API payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict


class Resource(BaseModel):
    """Resource response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime


class ResourceListResponse(BaseModel):
    """Paginated list envelope for resources."""

    items: list[Resource]
    page: int
    limit: int
    total: int
