"""Shared fixtures for issuetrack unit tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from issuetrack.models.context import IssueChangeContext
from issuetrack.models.issue import Issue
from issuetrack.observability.logging import setup_logging
from issuetrack.updater import IssueUpdater

NOW = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging() -> None:
    setup_logging("warning")


@pytest.fixture
def updater() -> IssueUpdater:
    return IssueUpdater()


@pytest.fixture
def issue() -> Issue:
    return Issue(key="ISSUE-1")


@pytest.fixture
def context() -> IssueChangeContext:
    return IssueChangeContext.create_user(NOW, "emmerik")
