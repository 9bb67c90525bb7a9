from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    APP_NAME: str = "TAAZA-BILLING"
    DATABASE_URL: str = "sqlite+pysqlite:///./taaza.db"
    SQLITE_BUSY_TIMEOUT_SEC: float = 30.0
    COUNTER_MAX_RETRIES: int = 5
    COUNTER_RETRY_BACKOFF_MS: int = 20
    ORDER_SEQUENCE_WIDTH: int = 5
    DEFAULT_PAYMENT_METHOD: str = "Cash"
    REPORTS_MAX_DATE_RANGE_DAYS: int = 366
    METRICS_ENABLED: bool = True
    SHOP_NAME: str = "TAAZA CHIKEN AND MUTTON"
    SHOP_PHONE: str = "8008469048"
    RECEIPT_WIDTH: int = 40


settings = Settings()
