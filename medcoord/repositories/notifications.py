# medcoord/repositories/notifications.py
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from medcoord.errors import NotFoundError
from medcoord.models.notifications import Notification
from medcoord.models.users import User


def add_notification(
    db: Session,
    *,
    user_id: int,
    type: str,
    title: str,
    message: str,
    action_url: Optional[str] = None,
) -> Notification:
    """Добавляет уведомление в текущую транзакцию (без коммита)."""
    obj = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        action_url=action_url,
    )
    db.add(obj)
    return obj


def notify_admins(
    db: Session,
    *,
    type: str,
    title: str,
    message: str,
    action_url: Optional[str] = None,
    exclude_user_id: Optional[int] = None,
) -> int:
    """Одинаковое уведомление всем активным администраторам. Возвращает количество."""
    admins: Iterable[User] = (
        db.query(User)
        .filter(User.role == "admin", User.is_active == True)  # noqa: E712
        .all()
    )
    count = 0
    for admin in admins:
        if admin.id == exclude_user_id:
            continue
        add_notification(
            db,
            user_id=admin.id,
            type=type,
            title=title,
            message=message,
            action_url=action_url,
        )
        count += 1
    return count


def list_notifications(
    db: Session,
    user_id: int,
    unread_only: bool = False,
) -> List[Notification]:
    query = db.query(Notification).filter(Notification.user_id == user_id)
    if unread_only:
        query = query.filter(Notification.read == False)  # noqa: E712
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()


def set_read(db: Session, notification_id: int, user_id: int, read: bool = True) -> Notification:
    """
    Отмечает уведомление прочитанным / непрочитанным.
    Чужие уведомления для пользователя «не существуют» — 404.
    """
    obj = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.user_id == user_id)
        .first()
    )
    if not obj:
        raise NotFoundError("Notification not found")
    obj.read = read
    db.commit()
    db.refresh(obj)
    return obj
