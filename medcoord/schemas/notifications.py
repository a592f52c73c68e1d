# medcoord/schemas/notifications.py
from datetime import datetime

from .common import CamelModel


class NotificationRead(CamelModel):
    id: int
    user_id: int
    type: str
    title: str
    message: str
    read: bool
    action_url: str | None = None
    created_at: datetime | None = None


class NotificationMark(CamelModel):
    read: bool
