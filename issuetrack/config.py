"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from issuetrack.models.config import IssueTrackConfig, LogConfig, UpdaterConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"ISSUETRACK_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_renderer(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log renderer: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> IssueTrackConfig:
    """Load configuration from ISSUETRACK_* environment variables."""
    return IssueTrackConfig(
        updater=UpdaterConfig(
            strict_severity=_env_bool("STRICT_SEVERITY", False),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            renderer=_validate_renderer(_env("LOG_RENDERER", "json")),
        ),
    )
