"""
Доменные исключения.

Сервисы и репозитории бросают их, а app.py переводит в HTTP-ответ
вида {"message": ..., "field": ...}.
"""
from __future__ import annotations

from typing import Optional


class MedCoordError(Exception):
    """Базовое исключение приложения."""

    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(MedCoordError):
    status_code = 400


class InvalidTransitionError(ValidationError):
    """Недопустимый переход статуса заявки."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            f"Cannot change request status from '{current}' to '{target}'",
            field="status",
        )
        self.current = current
        self.target = target


class NotFoundError(MedCoordError):
    status_code = 404


class UnauthorizedError(MedCoordError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized", field: Optional[str] = None) -> None:
        super().__init__(message, field)


class ForbiddenError(MedCoordError):
    status_code = 403


class ConflictError(MedCoordError):
    # дубликаты уникальных полей отдаём как 400 с общим сообщением
    status_code = 400


__all__ = [
    "MedCoordError",
    "ValidationError",
    "InvalidTransitionError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
]
