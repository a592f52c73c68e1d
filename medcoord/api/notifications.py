# medcoord/api/notifications.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import get_current_user
from medcoord.models.users import User
from medcoord.repositories.notifications import list_notifications, set_read
from medcoord.schemas.common import MAX_INT
from medcoord.schemas.notifications import NotificationMark, NotificationRead

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationRead])
def api_list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    unread: bool = Query(False, description="Только непрочитанные"),
):
    return list_notifications(db, current_user.id, unread_only=unread)


@router.patch("/{notification_id}", response_model=NotificationRead)
def api_mark_notification(
    data: NotificationMark,
    notification_id: int = Path(..., le=MAX_INT),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return set_read(db, notification_id, current_user.id, read=data.read)
