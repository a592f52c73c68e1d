# medcoord/schemas/users.py
from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import CamelModel, LoginPassword, Password

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(CamelModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: Password
    username: str | None = Field(None, min_length=1, max_length=50)
    # роль admin через регистрацию не выдаётся
    role: Literal["user", "professional"] = "user"
    first_name: str | None = None
    last_name: str | None = None
    city: str | None = None
    postal_code: str | None = None
    department: str | None = None
    phone: str | None = None


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: LoginPassword


class UserUpdate(CamelModel):
    """Частичное обновление профиля: передаются только изменяемые поля."""
    email: str | None = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    username: str | None = Field(None, min_length=1, max_length=50)
    password: Password | None = None
    first_name: str | None = None
    last_name: str | None = None
    city: str | None = None
    postal_code: str | None = None
    department: str | None = None
    phone: str | None = None


class UserBrief(CamelModel):
    id: int
    email: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class UserRead(UserBrief):
    role: str
    city: str | None = None
    postal_code: str | None = None
    is_professional: bool | None = None
    department: str | None = None
    phone: str | None = None
    is_active: bool | None = None
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class AuthResponse(CamelModel):
    user: UserRead
    token: str
    message: str
