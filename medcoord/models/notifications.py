# medcoord/models/notifications.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Index

from medcoord.db import Base, utcnow


class Notification(Base):
    """
    Уведомление пользователю. Только запись в БД —
    доставка (почта, мессенджеры) вне этого сервиса.
    """
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    type = Column(String(30), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    action_url = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=utcnow)

    __table_args__ = (
        Index("idx_notifications_user_read", "user_id", "read"),
    )
