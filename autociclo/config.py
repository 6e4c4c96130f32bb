# autociclo/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./autociclo.db"
    SQL_ECHO: bool = False              # Set True to log all SQL statements (debug only)

    # ── Listings ──────────────────────────────────────────────────────────
    PAGE_SIZE: int = 10
    TOP_MILEAGE_LIMIT: int = 5

    # ── Development ───────────────────────────────────────────────────────
    SEED_SAMPLE_DATA: bool = False      # Insert sample vehicles/parts on an empty database

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: Optional[str] = None       # Defaults to <repo>/logs

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
