# medcoord/services/demo_seed.py
"""
Демо-данные: четыре ресурса, шесть остатков, три оповещения.
Заполняет только пустую базу (нет ни одного ресурса).
"""
import logging

from sqlalchemy.orm import Session

from medcoord.models.resources import Resource
from medcoord.repositories.alerts import create_alert
from medcoord.repositories.resources import create_resource
from .stock_ledger import StockLedgerService

log = logging.getLogger(__name__)

DEMO_RESOURCES = [
    {"name": "Masques FFP2", "type": "equipment", "description": "Masques de protection respiratoire"},
    {"name": "Doliprane 1000mg", "type": "medication", "description": "Paracétamol"},
    {"name": "Infirmier(e)", "type": "staff", "description": "Personnel soignant diplômé"},
    {"name": "Respirateur", "type": "equipment", "description": "Ventilateur médical"},
]

# (индекс ресурса, город, индекс, количество)
DEMO_STOCKS = [
    (0, "Paris", "75001", 5000),
    (0, "Lyon", "69001", 2000),
    (1, "Marseille", "13001", 150),
    (1, "Paris", "75001", 40),
    (2, "Bordeaux", "33000", 5),
    (3, "Lille", "59000", 8),
]


def seed_demo_data(db: Session) -> bool:
    """Возвращает True, если данные были добавлены."""
    if db.query(Resource).count() > 0:
        return False

    log.info("Заполняем базу демо-данными...")
    resources = [create_resource(db, **item) for item in DEMO_RESOURCES]

    for idx, city, postal_code, qty in DEMO_STOCKS:
        StockLedgerService.record_quantity_change(
            db,
            resource_id=resources[idx].id,
            city=city,
            postal_code=postal_code,
            quantity=qty,
        )

    create_alert(
        db,
        type="shortage",
        severity="high",
        message="Pénurie de Doliprane à Marseille",
        city="Marseille",
        resource_id=resources[1].id,
    )
    create_alert(
        db,
        type="epidemic",
        severity="medium",
        message="Pic de grippe en Île-de-France",
        city="Paris",
    )
    create_alert(
        db,
        type="maintenance",
        severity="low",
        message="Maintenance des respirateurs prévue",
        city="Lille",
        resource_id=resources[3].id,
    )
    log.info("Демо-данные добавлены")
    return True
