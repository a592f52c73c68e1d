# medcoord/schemas/distribution.py
from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from .common import MAX_INT, CamelModel, to_naive_utc

PlanStatus = Literal["planned", "in_transit", "delivered", "cancelled"]


class DistributionPlanCreate(CamelModel):
    resource_id: int = Field(..., ge=1, le=MAX_INT)
    from_city: str = Field(..., min_length=1, max_length=100)
    to_city: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(..., gt=0, le=MAX_INT)
    status: PlanStatus = "planned"
    estimated_arrival: datetime | None = None

    @field_validator("estimated_arrival")
    @classmethod
    def _naive(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class DistributionPlanRead(CamelModel):
    id: int
    resource_id: int
    from_city: str
    to_city: str
    quantity: int
    status: str
    estimated_arrival: datetime | None = None
    created_by: int | None = None
    created_at: datetime | None = None
