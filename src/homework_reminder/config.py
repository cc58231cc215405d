# src/homework_reminder/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- The shared namespace (app group + key) is static configuration, never user input.
- Optional config_local.py overrides for a few safe switches.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "HOMEWORK"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Surfaces ----
    console_enabled: bool
    glance_enabled: bool

    # ---- Shared namespace ----
    data_dir: Path
    shared_db_path: Path
    app_group: str
    tasks_key: str

    # ---- Timing ----
    glance_refresh_minutes: int
    reminder_lead_minutes: int
    ingest_fallback_hours: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "homework") or "homework"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        glance_enabled = _env_bool(_k("GLANCE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/homework"))
        shared_db_path = _env_path(_k("SHARED_DB_PATH"), data_dir / "shared_defaults.sqlite3")
        app_group = _env(_k("APP_GROUP"), "group.homework.reminder").strip() or "group.homework.reminder"
        tasks_key = _env(_k("TASKS_KEY"), "SavedTasks").strip() or "SavedTasks"

        glance_refresh_minutes = max(1, _env_int(_k("GLANCE_REFRESH_MINUTES"), 10))
        reminder_lead_minutes = max(0, _env_int(_k("REMINDER_LEAD_MINUTES"), 60))
        ingest_fallback_hours = max(0, _env_int(_k("INGEST_FALLBACK_HOURS"), 24))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            glance_enabled=glance_enabled,
            data_dir=data_dir,
            shared_db_path=shared_db_path,
            app_group=app_group,
            tasks_key=tasks_key,
            glance_refresh_minutes=glance_refresh_minutes,
            reminder_lead_minutes=reminder_lead_minutes,
            ingest_fallback_hours=ingest_fallback_hours,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(SETTINGS, "console_enabled", bool(_config_local.CONSOLE_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "GLANCE_ENABLED"):
        object.__setattr__(SETTINGS, "glance_enabled", bool(_config_local.GLANCE_ENABLED))  # type: ignore[misc]
except ImportError:
    pass


def get_settings() -> Settings:
    return SETTINGS
