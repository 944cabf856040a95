# Local application imports
from app.models.notifications.issue_notification import NEW_ISSUE_NOTIFICATION, IssueNotification

__all__ = ["IssueNotification", "NEW_ISSUE_NOTIFICATION"]
