"""Tests for environment-based configuration and logging setup."""

from __future__ import annotations

import io
import json
from collections.abc import Iterator

import pytest

from issuetrack.config import load_config
from issuetrack.models.config import LogConfig
from issuetrack.models.context import IssueChangeContext
from issuetrack.models.issue import Issue
from issuetrack.observability.logging import setup_logging, setup_logging_from_config
from issuetrack.updater import GuardedFieldError, IssueUpdater

from .conftest import NOW


class TestLoadConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("ISSUETRACK_LOG_LEVEL", "ISSUETRACK_LOG_RENDERER", "ISSUETRACK_STRICT_SEVERITY"):
            monkeypatch.delenv(key, raising=False)

        config = load_config()

        assert config.log.level == "info"
        assert config.log.renderer == "json"
        assert config.updater.strict_severity is False

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ISSUETRACK_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ISSUETRACK_LOG_RENDERER", "console")
        monkeypatch.setenv("ISSUETRACK_STRICT_SEVERITY", "yes")

        config = load_config()

        assert config.log.level == "debug"
        assert config.log.renderer == "console"
        assert config.updater.strict_severity is True

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ISSUETRACK_LOG_LEVEL", "verbose")

        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_invalid_renderer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ISSUETRACK_LOG_RENDERER", "xml")

        with pytest.raises(ValueError, match="Invalid log renderer"):
            load_config()


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    stream = io.StringIO()
    yield stream
    setup_logging("warning")


class TestLogging:
    def test_rejected_update_is_logged(self, log_stream: io.StringIO) -> None:
        setup_logging_from_config(LogConfig(level="warning", renderer="json"), file=log_stream)
        issue = Issue(key="ISSUE-7", severity="MINOR", manual_severity=True)

        with pytest.raises(GuardedFieldError):
            IssueUpdater().set_severity(issue, "MAJOR", IssueChangeContext.create_user(NOW, "emmerik"))

        record = json.loads(log_stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "update_rejected"
        assert record["component"] == "updater"
        assert record["issue"] == "ISSUE-7"
        assert record["level"] == "warning"
        assert "ts" in record

    def test_debug_logs_each_update(self, log_stream: io.StringIO) -> None:
        setup_logging("debug", file=log_stream)

        IssueUpdater().assign(Issue(key="ISSUE-8"), "emmerik")

        record = json.loads(log_stream.getvalue().strip())
        assert record["event"] == "field_updated"
        assert record["field"] == "assignee"
        assert record["new"] == "emmerik"

    def test_debug_updates_filtered_at_warning(self, log_stream: io.StringIO) -> None:
        setup_logging("warning", file=log_stream)

        IssueUpdater().assign(Issue(), "emmerik")

        assert log_stream.getvalue() == ""

    def test_invalid_renderer(self) -> None:
        with pytest.raises(ValueError, match="Invalid log renderer"):
            setup_logging("info", renderer="xml")
