# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time: a missing Supabase URL/key means offline mode.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"

DEFAULT_TABLE = "todo-app"
DEFAULT_EMPTY_CAPTION = "  No Tasks Yet..."


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
    data_dir: Path

    # ---- Remote store (Supabase / PostgREST) ----
    supabase_url: str
    supabase_key: str
    table: str
    offline: bool

    # ---- HTTP timeouts ----
    connect_timeout_seconds: float
    read_timeout_seconds: float

    # ---- Empty-state caption ----
    empty_caption: str
    reveal_interval_ms: int

    @property
    def remote_configured(self) -> bool:
        return bool(self.supabase_url.strip()) and bool(self.supabase_key.strip())

    @property
    def reveal_interval_seconds(self) -> float:
        return max(0, self.reveal_interval_ms) / 1000.0

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard") or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))

        # Accept the plain Supabase names too, they are what the dashboard hands out.
        supabase_url = (_first_env(_k("SUPABASE_URL"), "SUPABASE_URL", default="") or "").strip()
        supabase_key = (
            _first_env(_k("SUPABASE_KEY"), "SUPABASE_KEY", "SUPABASE_ANON_KEY", default="") or ""
        ).strip()
        table = _env(_k("TABLE"), DEFAULT_TABLE).strip() or DEFAULT_TABLE
        offline = _env_bool(_k("OFFLINE"), False)

        connect_timeout = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("READ_TIMEOUT_SECONDS"), 15.0)

        # Not stripped: the leading spaces are part of the caption.
        empty_caption = _env(_k("EMPTY_CAPTION"), DEFAULT_EMPTY_CAPTION) or DEFAULT_EMPTY_CAPTION
        reveal_interval_ms = _env_int(_k("REVEAL_INTERVAL_MS"), 100)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            supabase_url=supabase_url,
            supabase_key=supabase_key,
            table=table,
            offline=offline,
            connect_timeout_seconds=connect_timeout,
            read_timeout_seconds=read_timeout,
            empty_caption=empty_caption,
            reveal_interval_ms=reveal_interval_ms,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
