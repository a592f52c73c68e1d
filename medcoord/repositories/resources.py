# medcoord/repositories/resources.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from medcoord.errors import NotFoundError
from medcoord.models.resources import Resource
from .audit_log import record_audit, snapshot

log = logging.getLogger(__name__)

RESOURCE_FIELDS = ("name", "type", "description", "critical_level", "recommended_stock")


def create_resource(
    db: Session,
    *,
    name: str,
    type: str,
    description: Optional[str] = None,
    critical_level: Optional[int] = 10,
    recommended_stock: Optional[int] = 100,
    actor=None,
) -> Resource:
    """
    Записывает новый ресурс в справочник.
    """
    obj = Resource(
        name=name,
        type=type,
        description=description,
        critical_level=critical_level,
        recommended_stock=recommended_stock,
    )
    db.add(obj)
    db.flush()

    record_audit(
        db,
        action="create",
        entity="resource",
        entity_id=obj.id,
        actor=actor,
        new_value=snapshot(obj, RESOURCE_FIELDS),
    )
    db.commit()
    db.refresh(obj)
    log.info("Ресурс создан: #%s %s (%s)", obj.id, obj.name, obj.type)
    return obj


def list_resources(db: Session, type: Optional[str] = None) -> List[Resource]:
    query = db.query(Resource)
    if type:
        query = query.filter(Resource.type == type)
    return query.order_by(Resource.id).all()


def get_resource(db: Session, resource_id: int) -> Resource:
    """Ресурс по id или NotFoundError."""
    obj = db.query(Resource).filter(Resource.id == resource_id).first()
    if not obj:
        raise NotFoundError("Resource not found", field="resourceId")
    return obj
