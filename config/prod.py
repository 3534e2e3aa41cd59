from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import SettingsConfigDict

from config.base import AppSettings, ROOT

ENV_FILE = ROOT / "env" / ".env.production"


class ProdSettings(AppSettings):
    APP_ENV: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
    )

    @model_validator(mode="after")
    def require_secret_key(self) -> "ProdSettings":
        # tokens signed with the development fallback key are forgeable
        if not self.SECRET_KEY:
            raise ValueError("SECRET_KEY must be set in production")
        return self
