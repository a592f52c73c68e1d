# medcoord/api/audit.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import get_current_admin
from medcoord.models.users import User
from medcoord.repositories.audit_log import list_audit_logs
from medcoord.schemas.audit import AuditLogRead
from medcoord.schemas.common import MAX_DAYS

router = APIRouter(prefix="/api/audit-logs", tags=["Audit"])


@router.get("", response_model=list[AuditLogRead])
def api_list_audit_logs(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
    entity: Optional[str] = Query(None, description="resource / stock / alert / request / ..."),
    days: Optional[int] = Query(None, ge=1, le=MAX_DAYS),
):
    return list_audit_logs(db, entity=entity, days=days)
