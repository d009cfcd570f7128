# order_service/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_TITLE: str = "Order Service API"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    API_PREFIX: str = "/api/v1"     # общий префикс версии API

    DATABASE_URL: str = "sqlite+aiosqlite:///./orders.db"

    LOG_DIR: str = "log"
    LOG_PRINT: str = "1"

    # внешняя валидация заказа
    VALIDATION_DELAY: float = 0.8       # имитация сетевой задержки, сек
    VALIDATION_THRESHOLD: float = 0.3   # random() > порога -> CONFIRMED

    # пагинация
    DEFAULT_PAGE: int = 1
    DEFAULT_LIMIT: int = 10
    MAX_LIMIT: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
