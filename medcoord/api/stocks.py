# medcoord/api/stocks.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import ActorContext, get_actor
from medcoord.repositories.resources import get_resource
from medcoord.schemas.common import MAX_DAYS, MAX_INT
from medcoord.schemas.stocks import StockHistoryRead, StockRead, StockUpdate, StockWithResource
from medcoord.services.stock_ledger import StockLedgerService

router = APIRouter(
    prefix="/api/stocks",
    tags=["Stocks"],
)


@router.get("", response_model=list[StockWithResource])
def api_list_stocks(
    db: Session = Depends(get_db),
    city: Optional[str] = Query(None, description="Фильтр по городу"),
    critical: bool = Query(False, description="Только остатки на уровне порога или ниже"),
):
    """
    Текущие остатки с ресурсом.
    critical=true → quantity <= critical_level ресурса (10, если порог не задан).
    """
    return StockLedgerService.list_stocks(db, city=city, critical_only=critical)


@router.post("", response_model=StockRead)
def api_update_stock(
    data: StockUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return StockLedgerService.record_quantity_change(
        db,
        resource_id=data.resource_id,
        city=data.city,
        postal_code=data.postal_code,
        quantity=data.quantity,
        change_reason=data.change_reason,
        actor=actor,
    )


@router.get("/{resource_id}/history", response_model=list[StockHistoryRead])
def api_stock_history(
    resource_id: int = Path(..., le=MAX_INT),
    db: Session = Depends(get_db),
    city: Optional[str] = Query(None),
    days: Optional[int] = Query(None, ge=1, le=MAX_DAYS, description="Окно в днях назад от текущего момента"),
):
    get_resource(db, resource_id)
    return StockLedgerService.get_history(db, resource_id, city=city, days=days)
