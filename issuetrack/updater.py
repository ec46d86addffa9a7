"""Issue updater: diff-tracked field updates on an ``Issue``.

Every tracked setter compares the proposed value with the current one using
value equality.  On change it mutates the issue, records a ``Diff`` under
the field's canonical name in ``issue.current_change``, flags the issue as
changed and returns True.  Setting a field to its current value returns
False and records nothing.

"Past" setters run the same primitive in baseline mode: they remember what
a field changed *from* (``issue.baseline(...)``) without touching the
current value or the change set.  Loaders use them when rebuilding an issue
whose previous state is known.

Severity is a guarded field: once a human set it (``manual_severity``), the
ordinary ``set_severity`` refuses to change it and raises
``GuardedFieldError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from issuetrack.models.config import UpdaterConfig
from issuetrack.models.context import IssueChangeContext
from issuetrack.models.diffs import values_equal
from issuetrack.models.enums import SEVERITIES
from issuetrack.models.issue import Issue, IssueComment
from issuetrack.observability.logging import get_logger

_logger = get_logger("updater")

# Canonical field names used as change set keys.
ASSIGNEE = "assignee"
SEVERITY = "severity"
RESOLUTION = "resolution"
STATUS = "status"
ACTION_PLAN = "actionPlanKey"
AUTHOR = "author"
EFFORT_TO_FIX = "effortToFix"
MESSAGE = "message"

_SEVERITY_LOCKED = "Severity can't be changed"


class IssueUpdateError(Exception):
    """Base class for rejected issue updates."""


class GuardedFieldError(IssueUpdateError):
    """Raised when an update targets a field locked against it."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class GuardViolation:
    """Why a guarded field cannot be updated."""

    field: str
    message: str

    def to_error(self) -> GuardedFieldError:
        return GuardedFieldError(self.field, self.message)


class IssueUpdater:
    """Applies field updates to issues and records what changed.

    Stateless apart from its configuration; one instance can be shared by
    every workflow of a process.  Callers serialize updates to a given issue.
    """

    def __init__(self, config: UpdaterConfig | None = None) -> None:
        self._config = config or UpdaterConfig()

    # ------------------------------------------------------------------
    # Core primitive
    # ------------------------------------------------------------------

    def _update_field(
        self,
        issue: Issue,
        attr: str,
        value: Any,
        context: IssueChangeContext | None,
        *,
        diff_name: str | None = None,
        record_history: bool = True,
        notify: bool = False,
    ) -> bool:
        """Compare-and-set ``issue.<attr>``.

        With ``record_history`` False the value becomes the field's baseline
        and the issue is left untouched; the result tells whether the
        baseline differs from the current value.
        """
        current = getattr(issue, attr)
        if not record_history:
            issue.set_baseline(attr, value)
            return not values_equal(current, value)
        if values_equal(current, value):
            return False
        setattr(issue, attr, value)
        if diff_name is not None:
            issue.set_field_change(context, diff_name, current, value)
        self._mark_changed(issue, context, notify=notify)
        _logger.debug("field_updated", issue=issue.key, field=attr, old=current, new=value)
        return True

    @staticmethod
    def _mark_changed(issue: Issue, context: IssueChangeContext | None, notify: bool = False) -> None:
        if context is not None:
            issue.update_date = context.date
        issue.is_changed = True
        if notify:
            issue.send_notifications = True

    def _check_severity_value(self, severity: str | None) -> None:
        if self._config.strict_severity and severity is not None and severity not in SEVERITIES:
            raise ValueError(f"Not a valid severity: {severity}")

    # ------------------------------------------------------------------
    # Tracked setters
    # ------------------------------------------------------------------

    def assign(self, issue: Issue, assignee: str | None, context: IssueChangeContext | None = None) -> bool:
        """Assign the issue to *assignee*, or unassign it with None."""
        return self._update_field(issue, "assignee", assignee, context, diff_name=ASSIGNEE, notify=True)

    def check_severity_guard(self, issue: Issue) -> GuardViolation | None:
        """Return the violation an ordinary severity change would hit, if any."""
        if issue.manual_severity:
            return GuardViolation(SEVERITY, _SEVERITY_LOCKED)
        return None

    def set_severity(
        self,
        issue: Issue,
        severity: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        """Change a computed severity.

        Raises:
            GuardedFieldError: the severity was set manually, whatever the
                proposed value.
        """
        violation = self.check_severity_guard(issue)
        if violation is not None:
            _logger.warning("update_rejected", issue=issue.key, field=violation.field, reason=violation.message)
            raise violation.to_error()
        self._check_severity_value(severity)
        return self._update_field(issue, "severity", severity, context, diff_name=SEVERITY, notify=True)

    def set_manual_severity(
        self,
        issue: Issue,
        severity: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        """Set the severity as a human override and lock it.

        Locking an unlocked issue counts as an update even when the value
        is unchanged; no diff is recorded in that case.
        """
        self._check_severity_value(severity)
        if issue.manual_severity and values_equal(issue.severity, severity):
            return False
        old = issue.severity
        issue.set_field_change(context, SEVERITY, old, severity)
        issue.severity = severity
        issue.manual_severity = True
        self._mark_changed(issue, context, notify=True)
        _logger.debug("field_updated", issue=issue.key, field="severity", old=old, new=severity, manual=True)
        return True

    def set_resolution(
        self,
        issue: Issue,
        resolution: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        return self._update_field(issue, "resolution", resolution, context, diff_name=RESOLUTION, notify=True)

    def set_status(self, issue: Issue, status: str | None, context: IssueChangeContext | None = None) -> bool:
        return self._update_field(issue, "status", status, context, diff_name=STATUS, notify=True)

    def set_attribute(
        self,
        issue: Issue,
        key: str,
        value: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        """Set an arbitrary attribute; None removes it. The diff is keyed by *key*."""
        old = issue.attribute(key)
        if values_equal(old, value):
            return False
        issue.set_attribute(key, value)
        issue.set_field_change(context, key, old, value)
        self._mark_changed(issue, context)
        _logger.debug("attribute_updated", issue=issue.key, attribute=key, old=old, new=value)
        return True

    def plan(
        self,
        issue: Issue,
        action_plan_key: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        """Attach the issue to an action plan, or detach it with None."""
        return self._update_field(
            issue, "action_plan_key", action_plan_key, context, diff_name=ACTION_PLAN, notify=True
        )

    def set_effort_to_fix(
        self,
        issue: Issue,
        effort: float | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        return self._update_field(issue, "effort_to_fix", effort, context, diff_name=EFFORT_TO_FIX)

    def set_message(
        self,
        issue: Issue,
        message: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        return self._update_field(issue, "message", message, context, diff_name=MESSAGE)

    def set_author_login(
        self,
        issue: Issue,
        author_login: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        return self._update_field(issue, "author_login", author_login, context, diff_name=AUTHOR)

    # ------------------------------------------------------------------
    # Untracked setters
    # ------------------------------------------------------------------

    def set_line(self, issue: Issue, line: int | None) -> bool:
        # Lines move with code edits; they are saved but never reported.
        return self._update_field(issue, "line", line, None)

    def set_close_date(
        self,
        issue: Issue,
        close_date: datetime | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        """Set the close date, compared at second precision."""
        truncated = close_date.replace(microsecond=0) if close_date is not None else None
        current = issue.close_date.replace(microsecond=0) if issue.close_date is not None else None
        if truncated == current:
            return False
        issue.close_date = truncated
        self._mark_changed(issue, context)
        return True

    def set_update_date(self, issue: Issue, update_date: datetime | None) -> bool:
        if issue.update_date == update_date:
            return False
        issue.update_date = update_date
        issue.is_changed = True
        return True

    def add_comment(self, issue: Issue, text: str, context: IssueChangeContext) -> IssueComment:
        comment = IssueComment(
            issue_key=issue.key,
            user_login=context.login,
            text=text,
            created_at=context.date,
        )
        issue.add_comment(comment)
        self._mark_changed(issue, context)
        return comment

    # ------------------------------------------------------------------
    # Past setters
    # ------------------------------------------------------------------

    def set_past_severity(
        self,
        issue: Issue,
        previous: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        self._check_severity_value(previous)
        return self._update_field(issue, "severity", previous, context, record_history=False)

    def set_past_line(self, issue: Issue, previous: int | None) -> bool:
        return self._update_field(issue, "line", previous, None, record_history=False)

    def set_past_effort_to_fix(
        self,
        issue: Issue,
        previous: float | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        return self._update_field(issue, "effort_to_fix", previous, context, record_history=False)

    def set_past_message(
        self,
        issue: Issue,
        previous: str | None,
        context: IssueChangeContext | None = None,
    ) -> bool:
        return self._update_field(issue, "message", previous, context, record_history=False)
