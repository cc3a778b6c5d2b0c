"""Resource API routes guarded by request validation."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from sqlalchemy.orm import Session

from hellokit.db.base import get_db_session
from hellokit.schemas.resource import Resource
from hellokit.schemas.resource import ResourceListResponse
from hellokit.services.resources import create_resource_service
from hellokit.services.resources import get_resource_service
from hellokit.services.resources import list_resources_service
from hellokit.validation.chains import IDENTIFIER_RULES
from hellokit.validation.chains import PAGINATION_RULES
from hellokit.validation.chains import USER_ENTITY_RULES
from hellokit.validation.middleware import handle_validation_errors
from hellokit.validation.middleware import validate
from hellokit.validation.middleware import validated_values

router = APIRouter(tags=["resources"])


@router.get(
    "/resources/{id}",
    response_model=Resource,
    dependencies=[Depends(validate(*IDENTIFIER_RULES)), Depends(handle_validation_errors)],
)
def get_resource_endpoint(
    request: Request,
    session: Session = Depends(get_db_session),
) -> Resource:
    """Get a single resource by its positive integer id."""
    resource_id = validated_values(request)["id"]
    return get_resource_service(session, resource_id)


@router.post(
    "/resources",
    response_model=Resource,
    status_code=201,
    dependencies=[Depends(validate(*USER_ENTITY_RULES)), Depends(handle_validation_errors)],
)
def create_resource_endpoint(
    request: Request,
    session: Session = Depends(get_db_session),
) -> Resource:
    """Create a resource from a sanitized name and normalized email."""
    values = validated_values(request)
    return create_resource_service(session, name=values["name"], email=values["email"])


@router.get(
    "/resources",
    response_model=ResourceListResponse,
    dependencies=[Depends(validate(*PAGINATION_RULES)), Depends(handle_validation_errors)],
)
def list_resources_endpoint(
    request: Request,
    session: Session = Depends(get_db_session),
) -> ResourceListResponse:
    """List resources one page at a time."""
    values = validated_values(request)
    items, page, limit, total = list_resources_service(
        session,
        page=values.get("page"),
        limit=values.get("limit"),
    )
    return ResourceListResponse(
        items=[Resource.model_validate(item) for item in items],
        page=page,
        limit=limit,
        total=total,
    )
