"""
Application Configuration — Environment & Settings
Centralizes all config from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "Bounce Cure Payments Admin API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    PORT: int = 5000

    # --- Database ---
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'payments.db'}"
    DB_SSL_REQUIRED: bool = True            # PostgreSQL only
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT_SECONDS: int = 10
    DB_POOL_RECYCLE_SECONDS: int = 30

    # --- Security ---
    JWT_SECRET: str = "bouncecure-admin-secret-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24
    LOGIN_RATE_LIMIT_REQUESTS: int = 10
    LOGIN_RATE_LIMIT_WINDOW_SECONDS: int = 60
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "https://bouncecure-payment.onrender.com",
    ]

    # --- Bootstrap admin (created on startup when set) ---
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_NAME: str = "Administrator"

    # --- Display ---
    INR_PER_USD: float = 75.0

    # --- Client ---
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
