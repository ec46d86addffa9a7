"""issuetrack: diff-tracked field updates for code-quality issues.

Exposes:
    IssueUpdater      -- compare-and-set field updates recording diffs.
    Issue             -- the in-memory issue record it mutates.
    IssueChangeContext -- actor and timestamp of a batch of updates.
    GuardedFieldError -- raised when a locked field is updated.
"""

from issuetrack.models import (
    Diff,
    FieldDiffs,
    Issue,
    IssueChangeContext,
    IssueComment,
    Resolution,
    Severity,
    Status,
)
from issuetrack.updater import GuardedFieldError, GuardViolation, IssueUpdateError, IssueUpdater

__version__ = "0.1.0"

__all__ = [
    "Diff",
    "FieldDiffs",
    "GuardViolation",
    "GuardedFieldError",
    "Issue",
    "IssueChangeContext",
    "IssueComment",
    "IssueUpdateError",
    "IssueUpdater",
    "Resolution",
    "Severity",
    "Status",
    "__version__",
]
