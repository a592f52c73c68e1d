# medcoord/models/distribution_plan.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from medcoord.db import Base, utcnow


class DistributionPlan(Base):
    """План перемещения ресурса между городами."""
    __tablename__ = "distribution_plan"

    id = Column(Integer, primary_key=True)
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=False, index=True)

    from_city = Column(String(100), nullable=False)
    to_city = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default="planned")
    estimated_arrival = Column(DateTime, nullable=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)

    resource = relationship("Resource")
