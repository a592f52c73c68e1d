# medcoord/schemas/alerts.py
from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import MAX_INT, CamelModel

AlertType = Literal["shortage", "epidemic", "info", "maintenance", "urgent"]
Severity = Literal["low", "medium", "high", "critical"]


class AlertCreate(CamelModel):
    type: AlertType
    severity: Severity
    message: str = Field(..., min_length=1)
    city: str | None = Field(None, max_length=100)
    resource_id: int | None = Field(None, ge=1, le=MAX_INT)


class AlertResolve(CamelModel):
    active: bool


class AlertRead(CamelModel):
    id: int
    type: str
    severity: str
    message: str
    city: str | None = None
    resource_id: int | None = None
    active: bool
    created_by: int | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
