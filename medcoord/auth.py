# medcoord/auth.py
"""
Пароли и токены сессий.

Токен: непрозрачная случайная строка. Клиент получает его при входе
(в теле ответа и в подписанной cookie-сессии), а сервер на каждом запросе
превращает токен в user_id через SessionStore. Хранилище подключаемое:
в памяти процесса или в таблице auth_sessions.
"""
from __future__ import annotations

import logging
import secrets
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from sqlalchemy.orm import Session

from .db import SessionLocal, utcnow
from .models.users import AuthSession
from .settings import settings

log = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """bcrypt-хэш пароля (соль внутри хэша)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Проверяет введённый пароль против хэша из базы."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # битый / не-bcrypt хэш в базе
        return False


def new_token() -> str:
    return secrets.token_urlsafe(32)


class SessionStore(ABC):
    """Интерфейс хранилища токенов: выдать, разрешить в user_id, отозвать."""

    def __init__(self, ttl_seconds: int) -> None:
        self.ttl = timedelta(seconds=ttl_seconds)

    @abstractmethod
    def create(self, user_id: int) -> str:
        ...

    @abstractmethod
    def resolve(self, token: str) -> Optional[int]:
        """user_id для живого токена, None — если токена нет или он истёк."""

    @abstractmethod
    def revoke(self, token: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemorySessionStore(SessionStore):
    """Токены в словаре процесса. Теряются при рестарте."""

    def __init__(self, ttl_seconds: int) -> None:
        super().__init__(ttl_seconds)
        self._lock = threading.Lock()
        self._items: dict[str, tuple[int, datetime]] = {}

    def create(self, user_id: int) -> str:
        token = new_token()
        now = utcnow()
        with self._lock:
            # заодно выкидываем истёкшие токены
            expired = [t for t, (_, expires_at) in self._items.items() if expires_at <= now]
            for t in expired:
                del self._items[t]
            self._items[token] = (user_id, now + self.ttl)
        return token

    def resolve(self, token: str) -> Optional[int]:
        with self._lock:
            item = self._items.get(token)
            if item is None:
                return None
            user_id, expires_at = item
            if expires_at <= utcnow():
                del self._items[token]
                return None
            return user_id

    def revoke(self, token: str) -> None:
        with self._lock:
            self._items.pop(token, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class DatabaseSessionStore(SessionStore):
    """Токены в таблице auth_sessions."""

    def __init__(self, ttl_seconds: int, session_factory=SessionLocal) -> None:
        super().__init__(ttl_seconds)
        self._session_factory = session_factory

    def create(self, user_id: int) -> str:
        token = new_token()
        db: Session = self._session_factory()
        now = utcnow()
        try:
            db.query(AuthSession).filter(AuthSession.expires_at <= now).delete()
            db.add(AuthSession(token=token, user_id=user_id, expires_at=now + self.ttl))
            db.commit()
        finally:
            db.close()
        return token

    def resolve(self, token: str) -> Optional[int]:
        db: Session = self._session_factory()
        try:
            row = db.query(AuthSession).filter(AuthSession.token == token).first()
            if row is None:
                return None
            if row.expires_at <= utcnow():
                db.delete(row)
                db.commit()
                return None
            return row.user_id
        finally:
            db.close()

    def revoke(self, token: str) -> None:
        db: Session = self._session_factory()
        try:
            db.query(AuthSession).filter(AuthSession.token == token).delete()
            db.commit()
        finally:
            db.close()

    def clear(self) -> None:
        db: Session = self._session_factory()
        try:
            db.query(AuthSession).delete()
            db.commit()
        finally:
            db.close()


def build_session_store() -> SessionStore:
    backend = settings.SESSION_BACKEND.lower()
    if backend == "memory":
        return MemorySessionStore(settings.SESSION_TTL_SECONDS)
    if backend == "database":
        return DatabaseSessionStore(settings.SESSION_TTL_SECONDS)
    raise ValueError(f"Unknown SESSION_BACKEND: {settings.SESSION_BACKEND!r}")


session_store: SessionStore = build_session_store()
