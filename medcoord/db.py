from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from .settings import settings


def _engine_kwargs(url: str) -> dict:
    """SQLite нужен отдельный набор параметров (потоки FastAPI + in-memory для тестов)."""
    if not url.startswith("sqlite"):
        return {}
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # одна общая in-memory база на все соединения
        kwargs["poolclass"] = StaticPool
    return kwargs


# Engine с "подстраховкой" соединения (pool_pre_ping), async нам пока не нужен
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    future=True,
    **_engine_kwargs(settings.DATABASE_URL),
)

# Фабрика сессий: без автокоммита и автофлаша
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

# База для декларативных моделей ORM (классический SQLAlchemy)
Base = declarative_base()


def utcnow() -> datetime:
    """Текущее время UTC без tzinfo — так оно хранится во всех таблицах."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    """Зависимость FastAPI: выдаёт Session и корректно закрывает её после запроса."""
    from sqlalchemy.orm import Session
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
