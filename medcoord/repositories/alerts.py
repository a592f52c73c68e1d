# medcoord/repositories/alerts.py
"""
Оповещения: дефицит, эпидемия, обслуживание и т.д.

Функции:
- create_alert: новое (активное) оповещение
- list_alerts: активные или все, новые сверху
- set_alert_active: снять / вернуть оповещение (с сохранением resolved_at)
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from medcoord.db import utcnow
from medcoord.errors import NotFoundError
from medcoord.models.alerts import Alert
from .audit_log import record_audit, snapshot
from .resources import get_resource

log = logging.getLogger(__name__)

ALERT_FIELDS = ("type", "severity", "message", "city", "resource_id", "active", "resolved_at")


def create_alert(
    db: Session,
    *,
    type: str,
    severity: str,
    message: str,
    city: Optional[str] = None,
    resource_id: Optional[int] = None,
    actor=None,
) -> Alert:
    if resource_id is not None:
        get_resource(db, resource_id)

    obj = Alert(
        type=type,
        severity=severity,
        message=message,
        city=city,
        resource_id=resource_id,
        active=True,
        created_by=getattr(actor, "user_id", None),
    )
    db.add(obj)
    db.flush()

    record_audit(
        db,
        action="create",
        entity="alert",
        entity_id=obj.id,
        actor=actor,
        new_value=snapshot(obj, ALERT_FIELDS),
    )
    db.commit()
    db.refresh(obj)
    log.info("Оповещение #%s [%s/%s] %s", obj.id, obj.type, obj.severity, obj.city or "-")
    return obj


def list_alerts(db: Session, active_only: bool = True) -> List[Alert]:
    query = db.query(Alert)
    if active_only:
        query = query.filter(Alert.active == True)  # noqa: E712
    return query.order_by(Alert.created_at.desc(), Alert.id.desc()).all()


def get_alert(db: Session, alert_id: int) -> Alert:
    obj = db.query(Alert).filter(Alert.id == alert_id).first()
    if not obj:
        raise NotFoundError("Alert not found")
    return obj


def set_alert_active(db: Session, alert_id: int, active: bool, actor=None) -> Alert:
    """
    Снятие оповещения (active=False) проставляет resolved_at,
    повторная активация его сбрасывает.
    """
    obj = get_alert(db, alert_id)
    before = snapshot(obj, ALERT_FIELDS)

    if obj.active and not active:
        obj.resolved_at = utcnow()
    elif active:
        obj.resolved_at = None
    obj.active = active

    record_audit(
        db,
        action="update",
        entity="alert",
        entity_id=obj.id,
        actor=actor,
        old_value=before,
        new_value=snapshot(obj, ALERT_FIELDS),
    )
    db.commit()
    db.refresh(obj)
    log.info("Оповещение #%s: active=%s", obj.id, obj.active)
    return obj
