# medcoord/models/stocks.py
"""
Текущие остатки ресурсов по городам и журнал их изменений.

Stock — одна строка на пару (resource_id, city), обновляется на месте.
StockHistory — только добавление, никогда не редактируется и не удаляется.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from medcoord.db import Base, utcnow


class Stock(Base):
    __tablename__ = "stocks"

    id = Column(Integer, primary_key=True)
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=False, index=True)

    city = Column(String(100), nullable=False, index=True)
    postal_code = Column(String(20), nullable=False)

    quantity = Column(Integer, nullable=False, default=0)

    last_restock_date = Column(DateTime, nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    resource = relationship("Resource", lazy="joined", backref="stocks")

    __table_args__ = (
        UniqueConstraint("resource_id", "city", name="uq_stocks_resource_city"),
    )

    def __repr__(self) -> str:
        return f"<Stock resource_id={self.resource_id} city={self.city!r} qty={self.quantity}>"


class StockHistory(Base):
    __tablename__ = "stock_history"

    id = Column(Integer, primary_key=True)
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=False, index=True)
    city = Column(String(100), nullable=False)

    # NULL — до этого записи по (ресурс, город) не было
    previous_quantity = Column(Integer, nullable=True)
    new_quantity = Column(Integer, nullable=False)

    change_reason = Column(String(30), nullable=False, default="restock")
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    resource = relationship("Resource")

    __table_args__ = (
        Index("idx_stock_history_resource_city", "resource_id", "city"),
    )
