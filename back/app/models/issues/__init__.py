# Local application imports
from app.models.issues.issue import (
    ISSUE_STATUS_FLOW,
    PENDING_STATUSES,
    RESOLVED_STATUSES,
    Issue,
    IssueCategory,
    IssuePriority,
    IssueStatus,
)

__all__ = [
    "Issue",
    "IssueCategory",
    "IssuePriority",
    "IssueStatus",
    "ISSUE_STATUS_FLOW",
    "PENDING_STATUSES",
    "RESOLVED_STATUSES",
]
