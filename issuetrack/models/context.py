"""Change context attached to a batch of field updates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class IssueChangeContext:
    """Who changed an issue, and when.

    Supplied by the calling workflow and shared by every field update of a
    pass. ``login`` is None for changes made by an automated scan.
    """

    date: datetime
    login: str | None = None
    scan: bool = False

    @classmethod
    def create_user(cls, date: datetime, login: str | None) -> IssueChangeContext:
        return cls(date=date, login=login, scan=False)

    @classmethod
    def create_scan(cls, date: datetime) -> IssueChangeContext:
        return cls(date=date, login=None, scan=True)
