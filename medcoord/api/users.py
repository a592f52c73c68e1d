# medcoord/api/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from medcoord.db import get_db
from medcoord.deps import get_current_admin, get_current_user
from medcoord.models.users import User
from medcoord.repositories.users import list_users, update_user
from medcoord.schemas.users import UserRead, UserUpdate

router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/user", response_model=UserRead)
def api_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/user", response_model=UserRead)
def api_update_me(
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return update_user(db, current_user, data.model_dump(exclude_unset=True))


@router.get("/users", response_model=list[UserRead])
def api_list_users(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    return list_users(db)
