from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from config.base import AppSettings, ROOT

ENV_FILE = ROOT / "env" / ".env.test"


class TestSettings(AppSettings):
    # In-memory SQLite; tests build their own engine on top of it
    DATABASE_URL: str | None = "sqlite+aiosqlite://"
    APP_ENV: str = "test"
    SECRET_KEY: str | None = "test-secret-key"
    DEBUG: bool = False
    API_BASE_URL: str = "http://testserver/api/v1"
    REQUEST_POLL_INTERVAL: float = 0.05
    FULL_REFRESH_INTERVAL: float = 0.2

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
