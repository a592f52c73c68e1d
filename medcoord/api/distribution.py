# medcoord/api/distribution.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import ActorContext, get_actor
from medcoord.repositories.distribution import create_distribution_plan, list_distribution_plans
from medcoord.schemas.distribution import DistributionPlanCreate, DistributionPlanRead

router = APIRouter(prefix="/api/distribution-plans", tags=["Distribution"])


@router.get("", response_model=list[DistributionPlanRead])
def api_list_plans(db: Session = Depends(get_db)):
    return list_distribution_plans(db)


@router.post("", response_model=DistributionPlanRead, status_code=status.HTTP_201_CREATED)
def api_create_plan(
    data: DistributionPlanCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return create_distribution_plan(db, actor=actor, **data.model_dump())
