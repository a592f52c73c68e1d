# medcoord/services/analytics_service.py
from __future__ import annotations

from datetime import timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from medcoord.db import utcnow
from medcoord.models.alerts import Alert
from medcoord.models.resources import Resource
from medcoord.models.stocks import StockHistory
from .request_lifecycle import RequestLifecycleService
from .stock_ledger import StockLedgerService


class AnalyticsService:
    """
    Сводные показатели. Всё считается из текущих данных на каждый вызов,
    без кэша и инкрементальных счётчиков.
    """

    @staticmethod
    def get_summary(db: Session) -> Dict[str, int]:
        stats = RequestLifecycleService.get_stats(db)
        return {
            "total_resources": db.query(Resource).count(),
            "critical_shortages": len(StockLedgerService.critical_stocks(db)),
            "pending_requests": stats.get("pending", 0),
            "active_alerts": db.query(Alert).filter(Alert.active == True).count(),  # noqa: E712
        }

    @staticmethod
    def get_stock_trends(
        db: Session,
        resource_id: Optional[int] = None,
        city: Optional[str] = None,
        days: int = 30,
    ) -> List[Dict]:
        """
        Динамика остатков из истории: одна точка на (день, город, ресурс) —
        последнее количество за этот день.
        """
        since = utcnow() - timedelta(days=days)
        query = (
            db.query(StockHistory, Resource.name)
            .join(Resource, StockHistory.resource_id == Resource.id)
            .filter(StockHistory.created_at >= since)
        )
        if resource_id is not None:
            query = query.filter(StockHistory.resource_id == resource_id)
        if city:
            query = query.filter(StockHistory.city == city)

        rows = query.order_by(StockHistory.created_at, StockHistory.id).all()

        points: Dict[tuple, Dict] = {}
        for entry, resource_name in rows:
            day = entry.created_at.date().isoformat()
            # более поздняя запись того же дня перезаписывает предыдущую
            points[(day, entry.city, entry.resource_id)] = {
                "date": day,
                "city": entry.city,
                "quantity": entry.new_quantity,
                "resource_name": resource_name,
            }

        return sorted(points.values(), key=lambda p: (p["date"], p["city"], p["resource_name"]))

    @staticmethod
    def get_distribution(db: Session) -> List[Dict]:
        """Сумма остатков и число критических позиций в разрезе город × тип ресурса."""
        groups: Dict[tuple, Dict] = {}
        for stock in StockLedgerService.list_stocks(db):
            key = (stock.city, stock.resource.type)
            item = groups.setdefault(
                key,
                {
                    "city": stock.city,
                    "resource_type": stock.resource.type,
                    "total_quantity": 0,
                    "critical_count": 0,
                },
            )
            item["total_quantity"] += stock.quantity
            if StockLedgerService.is_critical(stock):
                item["critical_count"] += 1

        return [groups[k] for k in sorted(groups)]
