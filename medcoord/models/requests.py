# medcoord/models/requests.py
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship

from medcoord.db import Base, utcnow


class ResourceRequest(Base):
    """Заявка пользователя на количество ресурса."""
    __tablename__ = "requests"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)

    # Статус храним текстом, допустимые значения и переходы — config/request_statuses.json
    status = Column(String(20), nullable=False, default="pending", index=True)
    urgency = Column(String(10), nullable=False, default="medium")

    city = Column(String(100), nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    estimated_delivery_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    resource = relationship("Resource", lazy="joined")
    user = relationship("User", foreign_keys=[user_id], lazy="joined")
    approver = relationship("User", foreign_keys=[approved_by])

    def __repr__(self) -> str:
        return f"<ResourceRequest id={self.id} status={self.status!r} qty={self.quantity}>"
