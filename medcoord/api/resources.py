# medcoord/api/resources.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import ActorContext, get_actor
from medcoord.repositories.resources import create_resource, get_resource, list_resources
from medcoord.schemas.common import MAX_INT
from medcoord.schemas.resources import ResourceCreate, ResourceRead

router = APIRouter(
    prefix="/api/resources",
    tags=["Resources"],
)


@router.get("", response_model=list[ResourceRead])
def api_list_resources(
    db: Session = Depends(get_db),
    type: Optional[str] = Query(None, description="medication / equipment / staff"),
):
    return list_resources(db, type=type)


@router.post("", response_model=ResourceRead, status_code=status.HTTP_201_CREATED)
def api_create_resource(
    data: ResourceCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return create_resource(db, actor=actor, **data.model_dump())


@router.get("/{resource_id}", response_model=ResourceRead)
def api_get_resource(
    resource_id: int = Path(..., le=MAX_INT),
    db: Session = Depends(get_db),
):
    return get_resource(db, resource_id)
