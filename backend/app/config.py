"""Runtime settings read from TICTAC_* environment variables (.env is loaded by server.py)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    # 0 disables the idle timeout: a quiet client keeps its socket forever.
    idle_timeout_seconds: float = 0.0
    max_connections: int = 1000


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _check_non_negative(name: str, raw: str, value: float) -> None:
    if value < 0:
        raise RuntimeError(f"{name} must not be negative, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
    _check_non_negative(name, raw, value)
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None
    _check_non_negative(name, raw, value)
    return value


def load_settings() -> Settings:
    origins = [o.strip() for o in _env_str("TICTAC_CORS_ORIGINS", "*").split(",") if o.strip()]
    return Settings(
        host=_env_str("TICTAC_HOST", Settings.host),
        port=_env_int("TICTAC_PORT", Settings.port),
        log_level=_env_str("TICTAC_LOG_LEVEL", Settings.log_level).upper(),
        cors_origins=origins or ["*"],
        idle_timeout_seconds=_env_float("TICTAC_IDLE_TIMEOUT_SECONDS", Settings.idle_timeout_seconds),
        max_connections=_env_int("TICTAC_MAX_CONNECTIONS", Settings.max_connections),
    )
