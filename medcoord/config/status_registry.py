import json
from pathlib import Path

# Папка, где лежит этот файл: medcoord/config
CONFIG_DIR = Path(__file__).parent

# medcoord/config/request_statuses.json
STATUS_FILE = CONFIG_DIR / "request_statuses.json"

DEFAULT_STATUS = "pending"


def load_statuses() -> list[dict]:
    """
    Читает request_statuses.json и возвращает список словарей со статусами заявок.
    Каждый элемент:
      {
        "code": "pending",
        "label": "En attente",
        "color": "#f0ad4e",
        "order": 10,
        "next": ["approved", "rejected", "cancelled"]
      }
    """
    with STATUS_FILE.open("r", encoding="utf-8") as f:
        data = json.load(f)

    data.sort(key=lambda s: s.get("order", 0))

    codes = {s["code"] for s in data}
    for s in data:
        unknown = set(s.get("next", [])) - codes
        if unknown:
            raise ValueError(f"Статус {s['code']!r}: неизвестные переходы {sorted(unknown)}")
    return data


# Готовый список статусов (отсортирован по order)
STATUS_LIST: list[dict] = load_statuses()

#   по коду: "pending" → {...}
STATUS_BY_CODE: dict[str, dict] = {s["code"]: s for s in STATUS_LIST}

# Таблица допустимых переходов: "pending" → {"approved", "rejected", "cancelled"}
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    s["code"]: frozenset(s.get("next", [])) for s in STATUS_LIST
}

# Конечные статусы — из них переходов нет
TERMINAL_STATUSES: frozenset[str] = frozenset(
    code for code, nxt in ALLOWED_TRANSITIONS.items() if not nxt
)


def status_codes() -> list[str]:
    """Все коды статусов — для валидации и дропдаунов."""
    return [s["code"] for s in STATUS_LIST]


def is_known(code: str | None) -> bool:
    return code in STATUS_BY_CODE


def label_by_code(code: str | None) -> str | None:
    """Из кода ("approved") → подпись ("Approuvée")."""
    if not code:
        return None
    s = STATUS_BY_CODE.get(code)
    return s["label"] if s else None


def can_transition(current: str, target: str) -> bool:
    """
    Разрешён ли переход current → target.
    Повторная установка того же статуса переходом не считается.
    """
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def is_terminal(code: str) -> bool:
    return code in TERMINAL_STATUSES
