# src/vibe_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole widget.
- No secrets required at import time (Matrix credentials are optional).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "VIBE"

DEFAULT_TASKS_FILENAME = ".vibe_tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


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


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
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

    # ---- Task file + deadline checks ----
    tasks_path: Path
    check_interval_seconds: float
    reminder_minutes: int

    # ---- Connector flags ----
    console_enabled: bool
    console_notify: bool
    matrix_enabled: bool

    # ---- Matrix (optional notification sink) ----
    matrix_homeserver: str
    matrix_user_id: str
    matrix_password: str
    matrix_room_id: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    matrix_store_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _first_env(_k("APP_NAME"), default="Vibe To-Do") or "Vibe To-Do"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        # Same file older releases used, so existing lists keep loading.
        tasks_path = _env_path(_k("TASKS_PATH"), Path.home() / DEFAULT_TASKS_FILENAME)
        check_interval_seconds = max(1.0, _env_float(_k("CHECK_INTERVAL_SECONDS"), 60.0))
        reminder_minutes = max(0, _env_int(_k("REMINDER_MINUTES"), 10))

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        console_notify = _env_bool(_k("CONSOLE_NOTIFY"), True)
        matrix_enabled = _env_bool(_k("MATRIX_ENABLED"), False)

        matrix_homeserver = (_first_env(_k("MATRIX_HOMESERVER"), "MATRIX_HOMESERVER", default="") or "").strip()
        matrix_user_id = (_first_env(_k("MATRIX_USER_ID"), "MATRIX_USER_ID", default="") or "").strip()
        matrix_password = (_first_env(_k("MATRIX_PASSWORD"), "MATRIX_PASSWORD", default="") or "").strip()
        matrix_room_id = (_first_env(_k("MATRIX_ROOM_ID"), default="") or "").strip()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/vibe"))
        matrix_store_path = _env_path(_k("MATRIX_STORE_PATH"), data_dir / "matrix_store")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            tasks_path=tasks_path,
            check_interval_seconds=check_interval_seconds,
            reminder_minutes=reminder_minutes,
            console_enabled=console_enabled,
            console_notify=console_notify,
            matrix_enabled=matrix_enabled,
            matrix_homeserver=matrix_homeserver,
            matrix_user_id=matrix_user_id,
            matrix_password=matrix_password,
            matrix_room_id=matrix_room_id,
            data_dir=data_dir,
            matrix_store_path=matrix_store_path,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env for secrets; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(SETTINGS, "console_enabled", bool(_config_local.CONSOLE_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "MATRIX_ENABLED"):
        object.__setattr__(SETTINGS, "matrix_enabled", bool(_config_local.MATRIX_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "TASKS_PATH"):
        object.__setattr__(SETTINGS, "tasks_path", Path(_config_local.TASKS_PATH).expanduser())  # type: ignore[misc]
except Exception:
    pass


def get_settings() -> Settings:
    return SETTINGS

