"""
Settings selection.

MODE (falling back to APP_ENV) picks the environment class; unknown or
missing modes get the local settings. Both the API server and the client
core read the module-level ``settings``.
"""
from __future__ import annotations

import os
from collections.abc import Mapping

from .base import AppSettings
from .local import LocalSettings
from .stage import StageSettings
from .prod import ProdSettings
from .test import TestSettings


SETTINGS_BY_MODE: dict[str, type[AppSettings]] = {
    "local": LocalSettings,
    "dev": LocalSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
    "test": TestSettings,
}


def resolve_mode(environ: Mapping[str, str] = os.environ) -> str:
    return (environ.get("MODE") or environ.get("APP_ENV") or "local").lower()


def settings_class_for(mode: str) -> type[AppSettings]:
    return SETTINGS_BY_MODE.get(mode.lower(), LocalSettings)


def load_settings(mode: str | None = None) -> AppSettings:
    """Instantiate settings for ``mode`` (default: from the environment)."""
    return settings_class_for(mode or resolve_mode())()


MODE = resolve_mode()
SettingsClass = settings_class_for(MODE)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "AppSettings", "MODE", "load_settings"]
