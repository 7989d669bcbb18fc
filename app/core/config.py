# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

DEFAULT_SECRET_KEY = "your-fallback-secret-key-12345"


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Inventory Tracker API"
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Security
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: Literal["HS256"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    RATE_LIMIT_ENABLED: bool = True

    # Database
    DATABASE_URL: str = "sqlite:///./inventory.db"
    SEED_SAMPLE_DATA: bool = False

    # Frontend
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Listing
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    LOG_FEED_LIMIT: int = 200

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def using_fallback_secret(self) -> bool:
        return self.SECRET_KEY == DEFAULT_SECRET_KEY


settings = Settings()
