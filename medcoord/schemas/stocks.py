# medcoord/schemas/stocks.py
from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import MAX_INT, CamelModel
from .resources import ResourceRead

ChangeReason = Literal["restock", "request_fulfilled", "manual_adjustment", "consumption"]


class StockUpdate(CamelModel):
    """
    Новое количество ресурса в городе.
    change_reason можно не указывать – тогда сервер определит сам.
    """
    resource_id: int = Field(..., ge=1, le=MAX_INT)
    city: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    quantity: int = Field(..., ge=0, le=MAX_INT)
    change_reason: ChangeReason | None = None


class StockRead(CamelModel):
    id: int
    resource_id: int
    city: str
    postal_code: str
    quantity: int
    last_restock_date: datetime | None = None
    updated_by: int | None = None
    updated_at: datetime | None = None


class StockWithResource(StockRead):
    resource: ResourceRead


class StockHistoryRead(CamelModel):
    id: int
    resource_id: int
    city: str
    previous_quantity: int | None = None
    new_quantity: int
    change_reason: str
    updated_by: int | None = None
    created_at: datetime
