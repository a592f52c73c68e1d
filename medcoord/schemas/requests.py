# medcoord/schemas/requests.py
from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from medcoord.config import status_registry
from .common import MAX_INT, CamelModel, to_naive_utc
from .resources import ResourceRead
from .users import UserBrief

Urgency = Literal["low", "medium", "high"]


class RequestCreate(CamelModel):
    resource_id: int = Field(..., ge=1, le=MAX_INT)
    quantity: int = Field(..., gt=0, le=MAX_INT)
    urgency: Urgency = "medium"
    city: str | None = Field(None, max_length=100)
    notes: str | None = None


class RequestStatusUpdate(CamelModel):
    status: str
    notes: str | None = None
    estimated_delivery_date: datetime | None = None

    @field_validator("status")
    @classmethod
    def _known_status(cls, v: str) -> str:
        if not status_registry.is_known(v):
            raise ValueError(f"status must be one of: {', '.join(status_registry.status_codes())}")
        return v

    @field_validator("estimated_delivery_date")
    @classmethod
    def _naive(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class RequestRead(CamelModel):
    id: int
    user_id: int
    resource_id: int
    quantity: int
    status: str
    urgency: str
    city: str | None = None
    approved_by: int | None = None
    estimated_delivery_date: datetime | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RequestDetail(RequestRead):
    resource: ResourceRead
    user: UserBrief
