from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

ROOT = Path(__file__).resolve().parents[1]


class AppSettings(BaseSettings):
    """Settings shared by every environment.

    Server side: database, token signing, table bootstrap.
    Client side: API location, HTTP timeout, polling cadence, session file.
    """
    DATABASE_URL: str | None = None
    APP_ENV: str = "local"
    SECRET_KEY: str | None = None
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Create tables from ORM metadata on startup (dev/test only, prefer Alembic)
    AUTO_CREATE_TABLES: bool = False

    API_BASE_URL: str = "http://localhost:8000/api/v1"
    HTTP_TIMEOUT: float = 10.0
    REQUEST_POLL_INTERVAL: float = 8.0
    FULL_REFRESH_INTERVAL: float = 60.0
    SESSION_FILE: str = str(Path.home() / ".assetguard" / "session.json")
