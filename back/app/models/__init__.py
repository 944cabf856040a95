"""
Database models package.

This package contains all SQLAlchemy models for the application.
"""

# Local application imports
from app.models.admin import AdminRole, AdminUser
from app.models.issues import Issue, IssueCategory, IssuePriority, IssueStatus
from app.models.notifications import IssueNotification

__all__ = [
    # Administrator roster
    "AdminRole",
    "AdminUser",
    # Issues
    "Issue",
    "IssueCategory",
    "IssuePriority",
    "IssueStatus",
    # Fan-out jobs
    "IssueNotification",
]
