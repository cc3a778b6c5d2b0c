"""Repository primitives for resource entities."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from hellokit.db.models.resource import Resource


def create_resource(session: Session, *, name: str, email: str) -> Resource:
    """Create and return a resource row."""
    resource = Resource(name=name, email=email)
    session.add(resource)
    session.flush()
    session.refresh(resource)
    return resource


def get_resource(session: Session, resource_id: int) -> Resource | None:
    """Fetch a resource by id."""
    return session.get(Resource, resource_id)


def list_resources(session: Session, *, limit: int = 10, offset: int = 0) -> list[Resource]:
    """List resources in id order."""
    stmt = select(Resource).order_by(Resource.id.asc()).limit(limit).offset(offset)
    return list(session.scalars(stmt))


def count_resources(session: Session) -> int:
    """Return the total number of stored resources."""
    return session.scalar(select(func.count()).select_from(Resource)) or 0
