# medcoord/schemas/resources.py
from typing import Literal

from pydantic import Field

from .common import MAX_INT, CamelModel

ResourceType = Literal["medication", "equipment", "staff"]


class ResourceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: ResourceType
    description: str | None = None
    critical_level: int | None = Field(10, ge=0, le=MAX_INT)
    recommended_stock: int | None = Field(100, ge=0, le=MAX_INT)


class ResourceRead(CamelModel):
    id: int
    name: str
    type: str
    description: str | None = None
    critical_level: int | None = None
    recommended_stock: int | None = None
