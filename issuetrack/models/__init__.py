"""Core data structures for issuetrack."""

from issuetrack.models.config import IssueTrackConfig
from issuetrack.models.context import IssueChangeContext
from issuetrack.models.diffs import Diff, FieldDiffs
from issuetrack.models.enums import Resolution, Severity, Status
from issuetrack.models.issue import Issue, IssueComment

__all__ = [
    "Diff",
    "FieldDiffs",
    "Issue",
    "IssueChangeContext",
    "IssueComment",
    "IssueTrackConfig",
    "Resolution",
    "Severity",
    "Status",
]
