from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Конфиг pydantic-settings
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    DATABASE_URL: str = "sqlite:///./medcoord.db"
    APP_TITLE: str = "MedCoord · Coordination des ressources médicales"

    # 🔐 Секретный ключ для подписи cookie-сессий
    SECRET_KEY: str = "change_me_in_env"

    # Хранилище токенов сессий: "memory" или "database"
    SESSION_BACKEND: str = "memory"
    SESSION_TTL_SECONDS: int = 8 * 3600
    SESSION_COOKIE_NAME: str = "medcoord_session"

    # true — переходы статусов заявок проверяются по реестру,
    # false — любой статус можно выставить из любого
    ENFORCE_REQUEST_TRANSITIONS: bool = True

    # Порог по умолчанию, если у ресурса не задан critical_level
    DEFAULT_CRITICAL_LEVEL: int = 10

    AUTO_CREATE_TABLES: bool = True
    SEED_DEMO_DATA: bool = False

    MASTER_ADMIN_USERNAME: str = "admin"
    MASTER_ADMIN_PASSWORD: str = "admin123"   # ЗАДАЙ ЛЮБОЙ ПАРОЛЬ в .env
    MASTER_ADMIN_EMAIL: str = "admin@medcoord.local"

    LOG_LEVEL: str = "INFO"


settings = Settings()
