# medcoord/schemas/audit.py
from datetime import datetime
from typing import Any

from .common import CamelModel


class AuditLogRead(CamelModel):
    id: int
    user_id: int | None = None
    action: str
    entity: str
    entity_id: int | None = None
    old_value: Any = None
    new_value: Any = None
    ip_address: str | None = None
    created_at: datetime | None = None
