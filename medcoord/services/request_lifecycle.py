# medcoord/services/request_lifecycle.py
"""
Жизненный цикл заявок на ресурсы.

Функции:
- create_request: новая заявка от текущего пользователя (статус pending)
- update_status: смена статуса по реестру переходов config/request_statuses.json
- find_matching_stocks: остатки, которых хватает на заявку
- get_stats: количество заявок по статусам

Списание остатка при выполнении заявки НЕ автоматизировано:
это отдельная операция StockLedgerService с причиной request_fulfilled.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from medcoord.config import status_registry
from medcoord.errors import InvalidTransitionError, NotFoundError, ValidationError
from medcoord.models.requests import ResourceRequest
from medcoord.models.stocks import Stock
from medcoord.repositories.audit_log import record_audit, snapshot
from medcoord.repositories.notifications import add_notification, notify_admins
from medcoord.repositories.resources import get_resource
from medcoord.settings import settings

log = logging.getLogger(__name__)

REQUEST_FIELDS = (
    "resource_id",
    "quantity",
    "status",
    "urgency",
    "city",
    "approved_by",
    "estimated_delivery_date",
    "notes",
)


class RequestLifecycleService:

    @staticmethod
    def get_request(db: Session, request_id: int) -> ResourceRequest:
        obj = db.query(ResourceRequest).filter(ResourceRequest.id == request_id).first()
        if not obj:
            raise NotFoundError("Request not found")
        return obj

    @staticmethod
    def create_request(
        db: Session,
        *,
        resource_id: int,
        quantity: int,
        actor,
        urgency: str = "medium",
        city: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ResourceRequest:
        """
        Создаёт заявку от имени actor. Ресурс обязан существовать,
        quantity > 0.
        """
        if quantity <= 0:
            raise ValidationError("quantity must be greater than 0", field="quantity")
        resource = get_resource(db, resource_id)

        obj = ResourceRequest(
            user_id=actor.user_id,
            resource_id=resource_id,
            quantity=quantity,
            status=status_registry.DEFAULT_STATUS,
            urgency=urgency or "medium",
            city=city,
            notes=notes,
        )
        db.add(obj)
        db.flush()

        record_audit(
            db,
            action="create",
            entity="request",
            entity_id=obj.id,
            actor=actor,
            new_value=snapshot(obj, REQUEST_FIELDS),
        )
        notify_admins(
            db,
            type="approval_needed",
            title=f"Nouvelle demande #{obj.id}",
            message=f"{quantity} × {resource.name}" + (f" ({city})" if city else ""),
            action_url=f"/requests/{obj.id}",
            exclude_user_id=actor.user_id,
        )
        db.commit()
        db.refresh(obj)
        log.info(
            "Заявка #%s: %s x %s, срочность %s, пользователь %s",
            obj.id, quantity, resource.name, obj.urgency, actor.user_id,
        )
        return obj

    @staticmethod
    def update_status(
        db: Session,
        request_id: int,
        *,
        status: str,
        actor,
        notes: Optional[str] = None,
        estimated_delivery_date: Optional[datetime] = None,
        enforce: Optional[bool] = None,
    ) -> ResourceRequest:
        """
        Меняет статус заявки.

        enforce=True — переход проверяется по реестру (pending → approved/rejected/cancelled,
        approved → fulfilled/cancelled, остальные конечные). enforce=False — любой статус
        из любого. По умолчанию берётся settings.ENFORCE_REQUEST_TRANSITIONS.
        Повторная установка текущего статуса допустима (обновить заметку / дату доставки).
        """
        if not status_registry.is_known(status):
            raise ValidationError(f"Unknown status '{status}'", field="status")
        if enforce is None:
            enforce = settings.ENFORCE_REQUEST_TRANSITIONS

        obj = RequestLifecycleService.get_request(db, request_id)
        current = obj.status
        if enforce and not status_registry.can_transition(current, status):
            log.info("Заявка #%s: отклонён переход %s → %s", obj.id, current, status)
            raise InvalidTransitionError(current, status)

        before = snapshot(obj, REQUEST_FIELDS)

        obj.status = status
        if status == "approved" and current != "approved":
            obj.approved_by = actor.user_id
        if notes is not None:
            obj.notes = notes
        if estimated_delivery_date is not None:
            obj.estimated_delivery_date = estimated_delivery_date

        record_audit(
            db,
            action="update",
            entity="request",
            entity_id=obj.id,
            actor=actor,
            old_value=before,
            new_value=snapshot(obj, REQUEST_FIELDS),
        )

        if status != current:
            label = status_registry.label_by_code(status) or status
            add_notification(
                db,
                user_id=obj.user_id,
                type="request_update",
                title=f"Demande #{obj.id} : {label}",
                message=f"Votre demande de {obj.quantity} × {obj.resource.name} est désormais « {label} ».",
                action_url=f"/requests/{obj.id}",
            )

        db.commit()
        db.refresh(obj)
        log.info("Заявка #%s: %s → %s (пользователь %s)", obj.id, current, status, actor.user_id)
        return obj

    @staticmethod
    def list_requests(
        db: Session,
        status: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> List[ResourceRequest]:
        """Заявки с ресурсом и пользователем, новые сверху."""
        if status and not status_registry.is_known(status):
            raise ValidationError(f"Unknown status '{status}'", field="status")
        query = db.query(ResourceRequest)
        if status:
            query = query.filter(ResourceRequest.status == status)
        if user_id is not None:
            query = query.filter(ResourceRequest.user_id == user_id)
        return query.order_by(ResourceRequest.created_at.desc(), ResourceRequest.id.desc()).all()

    @staticmethod
    def find_matching_stocks(
        db: Session,
        request_id: int,
        same_city: bool = False,
    ) -> List[Stock]:
        """
        Остатки того же ресурса, где quantity >= quantity заявки.
        По умолчанию во всех городах; same_city=True ограничивает городом заявки.
        """
        req = RequestLifecycleService.get_request(db, request_id)
        query = db.query(Stock).filter(
            Stock.resource_id == req.resource_id,
            Stock.quantity >= req.quantity,
        )
        if same_city and req.city:
            query = query.filter(Stock.city == req.city)
        return query.order_by(Stock.id).all()

    @staticmethod
    def get_stats(db: Session) -> Dict[str, int]:
        """Количество заявок по каждому статусу реестра (нули включены)."""
        rows = (
            db.query(ResourceRequest.status, func.count(ResourceRequest.id))
            .group_by(ResourceRequest.status)
            .all()
        )
        counts = {code: 0 for code in status_registry.status_codes()}
        for status, count in rows:
            counts[status] = int(count)
        return counts
