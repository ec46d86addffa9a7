"""Issue severity, status and resolution enumerations."""

from __future__ import annotations

from enum import StrEnum


class Severity(StrEnum):
    """Issue severity, from least to most severe."""

    INFO = "INFO"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"
    BLOCKER = "BLOCKER"


class Status(StrEnum):
    """Issue workflow status."""

    OPEN = "OPEN"
    CONFIRMED = "CONFIRMED"
    REOPENED = "REOPENED"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class Resolution(StrEnum):
    """Resolution of a resolved or closed issue."""

    FIXED = "FIXED"
    FALSE_POSITIVE = "FALSE-POSITIVE"
    REMOVED = "REMOVED"


SEVERITIES: frozenset[str] = frozenset(s.value for s in Severity)
