"""Issue record mutated by the issue updater."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from issuetrack.models.context import IssueChangeContext
from issuetrack.models.diffs import FieldDiffs, values_equal


@dataclass(frozen=True)
class IssueComment:
    """A comment left on an issue."""

    issue_key: str
    user_login: str | None
    text: str
    created_at: datetime
    key: str = field(default_factory=lambda: str(uuid4()))


@dataclass
class Issue:
    """In-memory issue owned by the calling workflow.

    Plain attribute assignment sets a field without any tracking and is what
    loaders use to rebuild an issue.  Tracked updates go through
    ``IssueUpdater``, which records diffs via :meth:`set_field_change`.
    """

    key: str = field(default_factory=lambda: str(uuid4()))
    assignee: str | None = None
    severity: str | None = None
    manual_severity: bool = False
    line: int | None = None
    resolution: str | None = None
    status: str | None = None
    action_plan_key: str | None = None
    effort_to_fix: float | None = None
    message: str | None = None
    author_login: str | None = None
    close_date: datetime | None = None
    update_date: datetime | None = None
    comments: list[IssueComment] = field(default_factory=list)

    # Dirty flag for persistence; set by every effective update.
    is_changed: bool = False
    send_notifications: bool = False

    _attributes: dict[str, str] = field(default_factory=dict, repr=False)
    _baselines: dict[str, Any] = field(default_factory=dict, repr=False)
    _current_change: FieldDiffs | None = field(default=None, repr=False)
    _changes: list[FieldDiffs] = field(default_factory=list, repr=False)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def attribute(self, key: str) -> str | None:
        """Return the attribute value, or None when *key* is absent."""
        return self._attributes.get(key)

    def set_attribute(self, key: str, value: str | None) -> Issue:
        """Set *key* to *value*; None removes the key."""
        if value is None:
            self._attributes.pop(key, None)
        else:
            self._attributes[key] = value
        return self

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    # ------------------------------------------------------------------
    # Baselines
    # ------------------------------------------------------------------

    def baseline(self, field_name: str) -> Any:
        """Value *field_name* had before the current changes, if known."""
        return self._baselines.get(field_name)

    def has_baseline(self, field_name: str) -> bool:
        return field_name in self._baselines

    def set_baseline(self, field_name: str, value: Any) -> Issue:
        self._baselines[field_name] = value
        return self

    # ------------------------------------------------------------------
    # Change tracking
    # ------------------------------------------------------------------

    @property
    def current_change(self) -> FieldDiffs | None:
        """Change set of the current pass, None while nothing changed."""
        return self._current_change

    @property
    def changes(self) -> list[FieldDiffs]:
        """Change sets of completed passes, oldest first."""
        return list(self._changes)

    def set_field_change(
        self,
        context: IssueChangeContext | None,
        field_name: str,
        old_value: Any,
        new_value: Any,
    ) -> Issue:
        if values_equal(old_value, new_value):
            return self
        if self._current_change is None:
            self._current_change = FieldDiffs(
                user_login=context.login if context else None,
                creation_date=context.date if context else None,
            )
        self._current_change.set_diff(field_name, old_value, new_value)
        if not self._current_change:
            # every field of the pass went back to its first value
            self._current_change = None
        return self

    def complete_change(self) -> FieldDiffs | None:
        """Close the current pass.

        Moves the current change set into :attr:`changes` and returns it.
        Returns None, and records nothing, when the pass changed no field.
        """
        change = self._current_change
        if change is not None:
            self._changes.append(change)
            self._current_change = None
        return change

    def add_comment(self, comment: IssueComment) -> Issue:
        self.comments.append(comment)
        return self
