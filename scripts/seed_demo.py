# scripts/seed_demo.py
"""
Создаёт таблицы, мастер-админа и заполняет пустую базу демо-данными.

    python -m scripts.seed_demo
"""
import logging

from medcoord.db import SessionLocal
from medcoord.repositories.users import ensure_master_admin
from medcoord.services.demo_seed import seed_demo_data
from medcoord.services.init_db import init_db
from medcoord.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main():
    init_db()
    db = SessionLocal()
    try:
        ensure_master_admin(
            db,
            email=settings.MASTER_ADMIN_EMAIL,
            username=settings.MASTER_ADMIN_USERNAME,
            password=settings.MASTER_ADMIN_PASSWORD,
        )
        if seed_demo_data(db):
            print("✅ Демо-данные добавлены")
        else:
            print("База уже содержит ресурсы — пропускаем")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
