# medcoord/repositories/users.py
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from medcoord.auth import hash_password, verify_password
from medcoord.db import utcnow
from medcoord.errors import ConflictError, UnauthorizedError
from medcoord.models.users import User
from .audit_log import record_audit

log = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Email or username already exists"

PROFILE_FIELDS = (
    "email",
    "username",
    "first_name",
    "last_name",
    "city",
    "postal_code",
    "department",
    "phone",
)


def _ensure_unique(
    db: Session,
    email: Optional[str],
    username: Optional[str],
    exclude_id: Optional[int] = None,
) -> None:
    conditions = []
    if email:
        conditions.append(User.email == email)
    if username:
        conditions.append(User.username == username)
    if not conditions:
        return
    query = db.query(User).filter(or_(*conditions))
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise ConflictError(DUPLICATE_MESSAGE)


def create_user(
    db: Session,
    *,
    email: str,
    password: str,
    username: Optional[str] = None,
    role: str = "user",
    **profile,
) -> User:
    email = email.lower()
    _ensure_unique(db, email, username)

    user = User(
        email=email,
        username=username,
        password_hash=hash_password(password),
        role=role,
        is_professional=role == "professional",
        is_active=True,
        **{k: v for k, v in profile.items() if k in PROFILE_FIELDS},
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("Зарегистрирован пользователь #%s %s (%s)", user.id, user.email, user.role)
    return user


def authenticate(db: Session, email: str, password: str, actor=None) -> User:
    """Проверка логина/пароля. Неудача — UnauthorizedError с общим сообщением."""
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        log.info("Неудачная попытка входа: %s", email)
        raise UnauthorizedError("Invalid email or password")

    # обновляем поле last_login_at у пользователя
    user.last_login_at = utcnow()
    record_audit(
        db,
        action="login",
        entity="user",
        entity_id=user.id,
        actor=actor,
    )
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: User, changes: dict) -> User:
    """
    Частичное обновление профиля. Пароль перехэшируется,
    email/username проверяются на уникальность.
    """
    if "email" in changes and changes["email"]:
        changes["email"] = changes["email"].lower()
    _ensure_unique(db, changes.get("email"), changes.get("username"), exclude_id=user.id)

    password = changes.pop("password", None)
    if password:
        user.password_hash = hash_password(password)

    for field, value in changes.items():
        if field in PROFILE_FIELDS and value is not None:
            setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def ensure_master_admin(db: Session, *, email: str, username: str, password: str) -> User:
    """
    Проверяем, есть ли мастер-админ. Если нет — создаём его,
    если есть, включаем ему админские права и активность.
    """
    admin = (
        db.query(User)
        .filter(or_(User.email == email.lower(), User.username == username))
        .first()
    )

    if not admin:
        admin = User(
            email=email.lower(),
            username=username,
            password_hash=hash_password(password),
            first_name="Admin",
            last_name="User",
            role="admin",
            is_active=True,
        )
        db.add(admin)
        db.commit()
        log.info("Мастер-админ создан: %s", email)
        return admin

    changed = False
    if admin.role != "admin":
        admin.role = "admin"
        changed = True
    if not admin.is_active:
        admin.is_active = True
        changed = True
    if changed:
        db.commit()
        log.info("Обновлены права существующего admin (role/is_active)")
    return admin
