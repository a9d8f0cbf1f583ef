# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./bookstore.db"

    # Identity provider (bearer tokens)
    AUTH_SECRET_KEY: str
    AUTH_ALGORITHM: Literal["HS256", "HS384", "HS512", "RS256"] = "HS256"
    AUTH_AUDIENCE: str | None = None
    AUTH_ISSUER: str | None = None

    # Frontend / CORS
    FRONTEND_URL: str | None = None
    CORS_ORIGIN_SUFFIX: str = ".vercel.app"

    # Inventory
    ALLOW_NEGATIVE_STOCK: bool = True

    # Rate limiting
    RATE_LIMIT_MUTATIONS: str = "60/minute"


    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
