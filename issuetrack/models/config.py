"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class UpdaterConfig:
    """Issue updater configuration."""

    strict_severity: bool = False


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    renderer: str = "json"


@dataclass
class IssueTrackConfig:
    """Top-level issuetrack configuration."""

    updater: UpdaterConfig = field(default_factory=UpdaterConfig)
    log: LogConfig = field(default_factory=LogConfig)
