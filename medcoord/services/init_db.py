# medcoord/services/init_db.py

from medcoord.db import engine, Base
import medcoord.models  # noqa: F401  (важно, чтобы модели были импортированы)


def init_db(bind=None):
    # создаёт в базе все таблицы, описанные моделями, которых ещё нет
    Base.metadata.create_all(bind=bind or engine)


if __name__ == "__main__":
    init_db()
    print("✅ Таблицы созданы / обновлены")
