from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from config.base import AppSettings, ROOT

ENV_FILE = ROOT / "env" / ".env.local"


class LocalSettings(AppSettings):
    DATABASE_URL: str | None = f"sqlite+aiosqlite:///{ROOT / 'assetguard.db'}"
    APP_ENV: str = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    AUTO_CREATE_TABLES: bool = True

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )
