# medcoord/schemas/common.py
from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Базовая схема API: наружу ключи в camelCase (resourceId, criticalLevel),
    на вход принимаем и camelCase, и snake_case.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,  # читаем прямо из ORM-объектов
        str_strip_whitespace=True,
    )


def to_naive_utc(dt: datetime | None) -> datetime | None:
    """Aware-дату приводим к UTC и убираем tzinfo — в БД всё хранится naive UTC."""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


# Верхние границы для чисел из запроса
MAX_DAYS = 36500
MAX_INT = 2_147_483_647  # INTEGER-колонки в БД 32-битные

# Пароль берём как есть: пробелы по краям не обрезаем
Password = Annotated[str, StringConstraints(strip_whitespace=False, min_length=6, max_length=128)]
LoginPassword = Annotated[str, StringConstraints(strip_whitespace=False, min_length=1)]
