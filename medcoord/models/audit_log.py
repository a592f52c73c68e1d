# medcoord/models/audit_log.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey, Index

from medcoord.db import Base, utcnow


class AuditLog(Base):
    """
    Журнал изменений. Связь с сущностью «мягкая»: (entity, entity_id).
    Только добавление.
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    action = Column(String(30), nullable=False)   # create, update, login
    entity = Column(String(50), nullable=False)   # resource, stock, alert, request, ...
    entity_id = Column(Integer, nullable=True)

    old_value = Column(JSON, nullable=True)
    new_value = Column(JSON, nullable=True)
    ip_address = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=utcnow, index=True)

    __table_args__ = (
        Index("idx_audit_entity", "entity", "entity_id"),
    )

    def __repr__(self) -> str:
        return f"<AuditLog id={self.id} {self.action} {self.entity}#{self.entity_id}>"
