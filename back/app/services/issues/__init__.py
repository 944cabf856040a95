# Local application imports
from app.services.issues.assignment_services import AUTO_ASSIGNED_BY, auto_assign_issue
from app.services.issues.issue_services import (
    add_issue_photos,
    assign_issue,
    get_dashboard_stats,
    get_issue_or_raise,
    submit_issue,
    update_issue_status,
)

__all__ = [
    "AUTO_ASSIGNED_BY",
    "add_issue_photos",
    "assign_issue",
    "auto_assign_issue",
    "get_dashboard_stats",
    "get_issue_or_raise",
    "submit_issue",
    "update_issue_status",
]
