# medcoord/repositories/audit_log.py
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from medcoord.db import utcnow
from medcoord.models.audit_log import AuditLog


def snapshot(obj, fields: Iterable[str]) -> dict:
    """
    Снимок полей ORM-объекта в JSON-совместимый dict (даты → ISO-строки).
    """
    out = {}
    for name in fields:
        value = getattr(obj, name, None)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        out[name] = value
    return out


def record_audit(
    db: Session,
    *,
    action: str,
    entity: str,
    entity_id: Optional[int],
    actor=None,
    old_value: Optional[dict] = None,
    new_value: Optional[dict] = None,
) -> AuditLog:
    """
    Добавляет запись журнала в текущую транзакцию.
    Коммит делает вызывающий код вместе с самим изменением.
    """
    entry = AuditLog(
        user_id=getattr(actor, "user_id", None),
        ip_address=getattr(actor, "ip_address", None),
        action=action,
        entity=entity,
        entity_id=entity_id,
        old_value=old_value,
        new_value=new_value,
    )
    db.add(entry)
    return entry


def list_audit_logs(
    db: Session,
    entity: Optional[str] = None,
    days: Optional[int] = None,
) -> List[AuditLog]:
    """Журнал изменений, новые сверху."""
    query = db.query(AuditLog)
    if entity:
        query = query.filter(AuditLog.entity == entity)
    if days:
        query = query.filter(AuditLog.created_at >= utcnow() - timedelta(days=days))
    return query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).all()
