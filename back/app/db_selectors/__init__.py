# Local application imports
from app.db_selectors.admin import (
    admin_user_exists,
    get_admin_user_by_id,
    list_admin_snapshots,
    list_admin_users,
)
from app.db_selectors.issues import (
    get_issue_by_id,
    list_issues,
    list_issues_by_phone,
    list_issues_for_stats,
    list_resolved_issues,
)
from app.db_selectors.notifications import get_notification_by_id

__all__ = [
    "admin_user_exists",
    "get_admin_user_by_id",
    "get_issue_by_id",
    "get_notification_by_id",
    "list_admin_snapshots",
    "list_admin_users",
    "list_issues",
    "list_issues_by_phone",
    "list_issues_for_stats",
    "list_resolved_issues",
]
