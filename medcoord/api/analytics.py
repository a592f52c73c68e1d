# medcoord/api/analytics.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.schemas.analytics import AnalyticsSummary, DistributionBreakdown, StockTrendPoint
from medcoord.schemas.common import MAX_DAYS, MAX_INT
from medcoord.services.analytics_service import AnalyticsService

router = APIRouter(
    prefix="/api/analytics",
    tags=["Analytics"],
)


@router.get("/summary", response_model=AnalyticsSummary)
def api_summary(db: Session = Depends(get_db)):
    """
    Сводка для главной страницы:
    - totalResources: ресурсов в справочнике
    - criticalShortages: остатков на уровне порога или ниже
    - pendingRequests: заявок в статусе pending
    - activeAlerts: активных оповещений
    """
    return AnalyticsService.get_summary(db)


@router.get("/stock-trends", response_model=list[StockTrendPoint])
def api_stock_trends(
    db: Session = Depends(get_db),
    resource_id: Optional[int] = Query(None, alias="resourceId", le=MAX_INT),
    city: Optional[str] = Query(None),
    days: int = Query(30, ge=1, le=MAX_DAYS, description="Дней истории"),
):
    return AnalyticsService.get_stock_trends(db, resource_id=resource_id, city=city, days=days)


@router.get("/distribution", response_model=list[DistributionBreakdown])
def api_distribution(db: Session = Depends(get_db)):
    """Остатки в разрезе город × тип ресурса."""
    return AnalyticsService.get_distribution(db)
