# medcoord/api/alerts.py
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import ActorContext, get_actor
from medcoord.repositories.alerts import create_alert, list_alerts, set_alert_active
from medcoord.schemas.alerts import AlertCreate, AlertRead, AlertResolve
from medcoord.schemas.common import MAX_INT

router = APIRouter(
    prefix="/api/alerts",
    tags=["Alerts"],
)


@router.get("", response_model=list[AlertRead])
def api_list_alerts(
    db: Session = Depends(get_db),
    active: bool = Query(True, description="false — вернуть все оповещения, включая снятые"),
):
    return list_alerts(db, active_only=active)


@router.post("", response_model=AlertRead, status_code=status.HTTP_201_CREATED)
def api_create_alert(
    data: AlertCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return create_alert(db, actor=actor, **data.model_dump())


@router.patch("/{alert_id}", response_model=AlertRead)
def api_resolve_alert(
    data: AlertResolve,
    alert_id: int = Path(..., le=MAX_INT),
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return set_alert_active(db, alert_id, data.active, actor=actor)
