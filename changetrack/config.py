"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from changetrack.models.config import ChangeTrackConfig, LedgerConfig, LogConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CHANGETRACK_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> ChangeTrackConfig:
    """Load configuration from CHANGETRACK_* environment variables."""
    return ChangeTrackConfig(
        ledger=LedgerConfig(
            verify_snapshots=_env_bool("VERIFY_SNAPSHOTS", False),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            json=_env_bool("LOG_JSON", True),
        ),
    )
