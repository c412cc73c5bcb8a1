# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Backend ───────────────────────────────────────────────────────────
    BACKEND_MODE: str = "remote"              # remote | local
    BACKEND_URL: Optional[str] = None         # Hosted data API base URL
    BACKEND_KEY: Optional[str] = None         # Public (anon) key for the hosted API

    # ── Local backend (BACKEND_MODE=local) ───────────────────────────────
    DATABASE_URL: str = "sqlite:///./fleet_admin.db"

    # ── Network ───────────────────────────────────────────────────────────
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Demo account (keep credentials out of the repo) ──────────────────
    DEMO_EMAIL: Optional[str] = None
    DEMO_PASSWORD: Optional[str] = None

    # ── Dashboard ─────────────────────────────────────────────────────────
    UPCOMING_SERVICES_LIMIT: int = 3

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"                   # relative paths resolve from the project root
    LOG_FILE: Optional[str] = "fleet_admin.log"   # empty disables the log file

    @property
    def backend_configured(self) -> bool:
        return bool(self.BACKEND_URL and self.BACKEND_KEY)

    @property
    def demo_enabled(self) -> bool:
        return bool(self.DEMO_EMAIL)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
