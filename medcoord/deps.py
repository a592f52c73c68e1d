from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from . import auth
from .db import get_db
from .errors import ForbiddenError, UnauthorizedError
from .models.users import User

SESSION_TOKEN_KEY = "token"


@dataclass(frozen=True)
class ActorContext:
    """Кто выполняет операцию: передаётся в сервисы явно, ничего не хардкодим."""
    user_id: Optional[int]
    ip_address: Optional[str] = None
    is_admin: bool = False


def extract_token(request: Request) -> Optional[str]:
    """
    Токен из заголовка Authorization: Bearer ... или из cookie-сессии.
    Заголовок важнее.
    """
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        token = header[7:].strip()
        if token:
            return token
    return request.session.get(SESSION_TOKEN_KEY)


def get_current_user_optional(
    request: Request,
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Пользователь текущего запроса или None, если не залогинен."""
    token = extract_token(request)
    if not token:
        return None
    user_id = auth.session_store.resolve(token)
    if user_id is None:
        return None
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        return None
    return user


def get_current_user(
    user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    """Достаёт пользователя по токену. Если не залогинен — 401."""
    if user is None:
        raise UnauthorizedError()
    return user


def get_current_admin(
    current_user: User = Depends(get_current_user),
) -> User:
    """Доступ только для администратора."""
    if not current_user.is_admin:
        raise ForbiddenError("Admin role required")
    return current_user


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def get_actor(
    request: Request,
    current_user: User = Depends(get_current_user),
) -> ActorContext:
    """Контекст авторизованного действия (для записи в сервисы и аудит)."""
    return ActorContext(
        user_id=current_user.id,
        ip_address=_client_ip(request),
        is_admin=current_user.is_admin,
    )


def get_anonymous_actor(request: Request) -> ActorContext:
    """Контекст для действий до входа (регистрация, логин)."""
    return ActorContext(user_id=None, ip_address=_client_ip(request))
