# medcoord/api/requests.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import ActorContext, get_actor, get_current_user
from medcoord.models.users import User
from medcoord.schemas.common import MAX_INT
from medcoord.schemas.requests import RequestCreate, RequestDetail, RequestRead, RequestStatusUpdate
from medcoord.schemas.stocks import StockWithResource
from medcoord.services.request_lifecycle import RequestLifecycleService

router = APIRouter(
    prefix="/api/requests",
    tags=["Requests"],
)


@router.get("", response_model=list[RequestDetail])
def api_list_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status_filter: Optional[str] = Query(None, alias="status", description="Код статуса"),
    user_id: Optional[int] = Query(None, alias="userId", le=MAX_INT),
):
    return RequestLifecycleService.list_requests(db, status=status_filter, user_id=user_id)


@router.get("/stats")
def api_request_stats(db: Session = Depends(get_db)):
    """Количество заявок по статусам: {pending, approved, rejected, fulfilled, cancelled}."""
    return RequestLifecycleService.get_stats(db)


@router.post("", response_model=RequestRead, status_code=status.HTTP_201_CREATED)
def api_create_request(
    data: RequestCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return RequestLifecycleService.create_request(
        db,
        resource_id=data.resource_id,
        quantity=data.quantity,
        urgency=data.urgency,
        city=data.city,
        notes=data.notes,
        actor=actor,
    )


@router.get("/{request_id}", response_model=RequestDetail)
def api_get_request(
    request_id: int = Path(..., le=MAX_INT),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return RequestLifecycleService.get_request(db, request_id)


@router.patch("/{request_id}", response_model=RequestRead)
def api_update_request_status(
    data: RequestStatusUpdate,
    request_id: int = Path(..., le=MAX_INT),
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return RequestLifecycleService.update_status(
        db,
        request_id,
        status=data.status,
        notes=data.notes,
        estimated_delivery_date=data.estimated_delivery_date,
        actor=actor,
    )


@router.get("/{request_id}/matches", response_model=list[StockWithResource])
def api_request_matches(
    request_id: int = Path(..., le=MAX_INT),
    db: Session = Depends(get_db),
    same_city: bool = Query(False, alias="sameCity", description="Только в городе заявки"),
):
    """
    Остатки, которых хватает на заявку (quantity >= quantity заявки).
    По умолчанию ищем во всех городах.
    """
    return RequestLifecycleService.find_matching_stocks(db, request_id, same_city=same_city)
