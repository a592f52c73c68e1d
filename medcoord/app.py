import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .api import (
    alerts,
    analytics,
    audit,
    auth as auth_api,
    distribution,
    export,
    notifications,
    requests as requests_api,
    resources,
    stocks,
    users,
)
from .db import SessionLocal, utcnow
from .errors import MedCoordError
from .repositories.users import ensure_master_admin
from .services.demo_seed import seed_demo_data
from .services.init_db import init_db
from .settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


app = FastAPI(title=settings.APP_TITLE)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_TTL_SECONDS,
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


# === Ошибки: всегда {"message": ..., "field": ...} ===
@app.exception_handler(MedCoordError)
async def medcoord_error_handler(request: Request, exc: MedCoordError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc вида ("body", "quantity") / ("query", "days")
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = _camel(loc[-1]) if loc else None
    body = {"message": first.get("msg", "Invalid request")}
    if field:
        body["field"] = field
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    log.exception("Необработанная ошибка: %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# === Таблицы, мастер-админ и демо-данные при старте ===
@app.on_event("startup")
def on_startup():
    if settings.AUTO_CREATE_TABLES:
        init_db()

    db = SessionLocal()
    try:
        ensure_master_admin(
            db,
            email=settings.MASTER_ADMIN_EMAIL,
            username=settings.MASTER_ADMIN_USERNAME,
            password=settings.MASTER_ADMIN_PASSWORD,
        )
        if settings.SEED_DEMO_DATA and seed_demo_data(db):
            log.info("Демо-данные добавлены")
    finally:
        db.close()


@app.get("/api/health", tags=["Health"])
def api_health():
    return {"status": "ok", "timestamp": utcnow().isoformat()}


# Подключаем API-роутеры
app.include_router(auth_api.router)
app.include_router(users.router)
app.include_router(resources.router)
app.include_router(stocks.router)
app.include_router(alerts.router)
app.include_router(requests_api.router)
app.include_router(notifications.router)
app.include_router(audit.router)
app.include_router(distribution.router)
app.include_router(analytics.router)
app.include_router(export.router)
