# medcoord/models/alerts.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey

from medcoord.db import Base, utcnow


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True)

    type = Column(String(20), nullable=False)
    severity = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)

    # Привязка (опционально)
    city = Column(String(100), nullable=True)
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=True)

    active = Column(Boolean, nullable=False, default=True, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    resolved_at = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Alert id={self.id} type={self.type!r} active={self.active}>"
