# medcoord/services/stock_ledger.py
from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from medcoord.db import utcnow
from medcoord.models.resources import Resource
from medcoord.models.stocks import Stock, StockHistory
from medcoord.repositories.audit_log import record_audit, snapshot
from medcoord.repositories.notifications import notify_admins
from medcoord.repositories.resources import get_resource
from medcoord.settings import settings

log = logging.getLogger(__name__)

STOCK_FIELDS = ("resource_id", "city", "postal_code", "quantity")


class StockLedgerService:
    """
    Учёт остатков ресурсов по городам.

    Одна строка Stock на пару (ресурс, город): обновление — это upsert,
    а каждое изменение дописывается в StockHistory с прежним и новым количеством.
    Блокировок нет: параллельные записи в одну пару могут гоняться.
    """

    @staticmethod
    def critical_threshold(resource: Resource) -> int:
        """Порог ресурса; если не задан — DEFAULT_CRITICAL_LEVEL (0 — валидный порог)."""
        if resource.critical_level is None:
            return settings.DEFAULT_CRITICAL_LEVEL
        return resource.critical_level

    @staticmethod
    def is_critical(stock: Stock) -> bool:
        return stock.quantity <= StockLedgerService.critical_threshold(stock.resource)

    @staticmethod
    def _default_reason(previous: Optional[int], new: int) -> str:
        if previous is None or new > previous:
            return "restock"
        return "manual_adjustment"

    @staticmethod
    def record_quantity_change(
        db: Session,
        *,
        resource_id: int,
        city: str,
        postal_code: str,
        quantity: int,
        change_reason: Optional[str] = None,
        actor=None,
    ) -> Stock:
        """
        Записывает новое количество ресурса в городе.

        Логика:
        1. Найти текущую строку (resource_id, city), её quantity станет previous_quantity
        2. Обновить её (или создать, если не было)
        3. Дописать строку истории previous → new
        4. Аудит + один commit
        """
        resource = get_resource(db, resource_id)
        user_id = getattr(actor, "user_id", None)
        now = utcnow()

        stock = (
            db.query(Stock)
            .filter(Stock.resource_id == resource_id, Stock.city == city)
            .first()
        )

        if stock is None:
            previous = None
            before = None
            stock = Stock(resource_id=resource_id, city=city)
            db.add(stock)
        else:
            previous = stock.quantity
            before = snapshot(stock, STOCK_FIELDS)

        stock.postal_code = postal_code
        stock.quantity = quantity
        stock.updated_by = user_id
        stock.updated_at = now
        if previous is None or quantity > previous:
            stock.last_restock_date = now

        reason = change_reason or StockLedgerService._default_reason(previous, quantity)
        db.add(
            StockHistory(
                resource_id=resource_id,
                city=city,
                previous_quantity=previous,
                new_quantity=quantity,
                change_reason=reason,
                updated_by=user_id,
                created_at=now,
            )
        )
        db.flush()

        record_audit(
            db,
            action="create" if previous is None else "update",
            entity="stock",
            entity_id=stock.id,
            actor=actor,
            old_value=before,
            new_value=snapshot(stock, STOCK_FIELDS),
        )

        threshold = StockLedgerService.critical_threshold(resource)
        if quantity <= threshold:
            log.warning(
                "Критический остаток: %s в %s: %s (порог %s)",
                resource.name, city, quantity, threshold,
            )
        # уведомление только при входе в критическую зону
        if quantity <= threshold and (previous is None or previous > threshold):
            notify_admins(
                db,
                type="stock_warning",
                title=f"Stock critique : {resource.name}",
                message=f"{resource.name} à {city} : {quantity} (seuil {threshold})",
                action_url=f"/stocks?city={city}",
            )

        db.commit()
        db.refresh(stock)
        log.info(
            "Остаток %s / %s: %s → %s (%s)",
            resource.name, city, previous, quantity, reason,
        )
        return stock

    @staticmethod
    def list_stocks(
        db: Session,
        city: Optional[str] = None,
        critical_only: bool = False,
    ) -> List[Stock]:
        """Текущие остатки (с ресурсом), в порядке добавления."""
        query = db.query(Stock).join(Resource, Stock.resource_id == Resource.id)
        if city:
            query = query.filter(Stock.city == city)
        if critical_only:
            query = query.filter(
                Stock.quantity <= func.coalesce(Resource.critical_level, settings.DEFAULT_CRITICAL_LEVEL)
            )
        return query.order_by(Stock.id).all()

    @staticmethod
    def critical_stocks(db: Session) -> List[Stock]:
        return StockLedgerService.list_stocks(db, critical_only=True)

    @staticmethod
    def get_history(
        db: Session,
        resource_id: int,
        city: Optional[str] = None,
        days: Optional[int] = None,
    ) -> List[StockHistory]:
        """История изменений ресурса, новые сверху. days — окно назад от текущего момента."""
        query = db.query(StockHistory).filter(StockHistory.resource_id == resource_id)
        if city:
            query = query.filter(StockHistory.city == city)
        if days:
            query = query.filter(StockHistory.created_at >= utcnow() - timedelta(days=days))
        return query.order_by(StockHistory.created_at.desc(), StockHistory.id.desc()).all()
