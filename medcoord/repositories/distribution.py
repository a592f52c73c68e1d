# medcoord/repositories/distribution.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from medcoord.errors import ValidationError
from medcoord.models.distribution_plan import DistributionPlan
from .audit_log import record_audit, snapshot
from .resources import get_resource

PLAN_FIELDS = ("resource_id", "from_city", "to_city", "quantity", "status", "estimated_arrival")


def create_distribution_plan(
    db: Session,
    *,
    resource_id: int,
    from_city: str,
    to_city: str,
    quantity: int,
    status: str = "planned",
    estimated_arrival: Optional[datetime] = None,
    actor=None,
) -> DistributionPlan:
    if from_city.casefold() == to_city.casefold():
        raise ValidationError("fromCity and toCity must differ", field="toCity")
    get_resource(db, resource_id)

    obj = DistributionPlan(
        resource_id=resource_id,
        from_city=from_city,
        to_city=to_city,
        quantity=quantity,
        status=status,
        estimated_arrival=estimated_arrival,
        created_by=getattr(actor, "user_id", None),
    )
    db.add(obj)
    db.flush()

    record_audit(
        db,
        action="create",
        entity="distribution_plan",
        entity_id=obj.id,
        actor=actor,
        new_value=snapshot(obj, PLAN_FIELDS),
    )
    db.commit()
    db.refresh(obj)
    return obj


def list_distribution_plans(db: Session) -> List[DistributionPlan]:
    return (
        db.query(DistributionPlan)
        .order_by(DistributionPlan.created_at.desc(), DistributionPlan.id.desc())
        .all()
    )
