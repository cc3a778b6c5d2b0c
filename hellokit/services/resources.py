"""Service helpers for resource API operations."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hellokit.core.errors import ConflictError
from hellokit.core.errors import NotFoundError
from hellokit.db.repository.resources import count_resources
from hellokit.db.repository.resources import create_resource
from hellokit.db.repository.resources import get_resource
from hellokit.db.repository.resources import list_resources

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def create_resource_service(session: Session, *, name: str, email: str):
    """Create and persist a new resource."""
    try:
        resource = create_resource(session, name=name, email=email)
        session.commit()
        return resource
    except IntegrityError:
        session.rollback()
        raise ConflictError(message="A resource with this email already exists")


def get_resource_service(session: Session, resource_id: int):
    """Fetch a resource or raise not found."""
    resource = get_resource(session, resource_id)
    if resource is None:
        raise NotFoundError(message="Resource not found")
    return resource


def list_resources_service(session: Session, *, page: int | None = None, limit: int | None = None):
    """Return one page of resources plus the total count."""
    page = page or DEFAULT_PAGE
    limit = limit or DEFAULT_LIMIT
    items = list_resources(session, limit=limit, offset=(page - 1) * limit)
    return items, page, limit, count_resources(session)
