# medcoord/api/auth.py
import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from medcoord import auth
from medcoord.db import get_db
from medcoord.deps import (
    SESSION_TOKEN_KEY,
    ActorContext,
    extract_token,
    get_anonymous_actor,
    get_current_user,
)
from medcoord.models.users import User
from medcoord.repositories.users import authenticate, create_user
from medcoord.schemas.users import AuthResponse, LoginRequest, RegisterRequest, UserRead

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
)


def _open_session(request: Request, user: User) -> str:
    """Выдаём токен и кладём его в подписанную cookie-сессию."""
    token = auth.session_store.create(user.id)
    request.session[SESSION_TOKEN_KEY] = token
    return token


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def api_register(
    data: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    payload = data.model_dump(exclude={"email", "password", "username", "role"})
    user = create_user(
        db,
        email=data.email,
        password=data.password,
        username=data.username,
        role=data.role,
        **payload,
    )
    # сразу логиним
    token = _open_session(request, user)
    return {"user": user, "token": token, "message": "User registered successfully"}


@router.post("/login", response_model=AuthResponse)
def api_login(
    data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_anonymous_actor),
):
    user = authenticate(db, data.email, data.password, actor=actor)

    # закрываем предыдущую сессию этого браузера, если была
    old_token = request.session.get(SESSION_TOKEN_KEY)
    if old_token:
        auth.session_store.revoke(old_token)

    token = _open_session(request, user)
    log.info("Вход: %s (#%s)", user.email, user.id)
    return {"user": user, "token": token, "message": "Login successful"}


@router.post("/logout")
def api_logout(request: Request):
    token = extract_token(request)
    if token:
        auth.session_store.revoke(token)
    # чистим сессию
    request.session.clear()
    return {"message": "Logout successful"}


@router.get("/user", response_model=UserRead)
def api_auth_user(current_user: User = Depends(get_current_user)):
    return current_user
