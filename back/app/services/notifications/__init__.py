# Local application imports
from app.services.notifications.dispatch_services import dispatch_issue_notification
from app.services.notifications.resolver import resolve_assignee, resolve_audience

__all__ = ["dispatch_issue_notification", "resolve_assignee", "resolve_audience"]
