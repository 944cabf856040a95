# Standard library imports
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.monitoring.logging import get_contextual_logger
from app.db_selectors.admin import get_admin_user_by_id
from app.db_selectors.issues import get_issue_by_id, list_issues_for_stats
from app.models.admin.admin_user import AdminUser
from app.models.issues.issue import RESOLVED_STATUSES, Issue, IssuePriority, IssueStatus
from app.models.notifications.issue_notification import NEW_ISSUE_NOTIFICATION, IssueNotification
from app.schemas.issues.issue_schemas import DashboardStats, IssueCreate
from app.services.exceptions import AdminUserNotFoundError, IssueNotFoundError, PhotoLimitExceededError
from app.settings import settings

logger = get_contextual_logger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


async def submit_issue(db: AsyncSession, issue_data: IssueCreate) -> tuple[Issue, IssueNotification]:
    """
    Create a citizen issue and the new_issue notification record that fans it out.

    Photos are attached afterwards, namespaced by the generated issue id.
    """
    location = issue_data.location
    issue = Issue(
        title=issue_data.title,
        description=issue_data.description,
        category=issue_data.category,
        priority=IssuePriority.MEDIUM,
        status=IssueStatus.SUBMITTED,
        latitude=location.latitude,
        longitude=location.longitude,
        address=location.address,
        state=location.state,
        district=location.district,
        panchayat_union=location.panchayat_union,
        district_id=location.district_id,
        panchayat_union_id=location.panchayat_union_id,
        submitter_phone=issue_data.submitter_phone,
        before_photos=[],
        after_photos=[],
    )
    db.add(issue)
    await db.flush()

    notification = IssueNotification(
        type=NEW_ISSUE_NOTIFICATION,
        issue_id=issue.id,
        title=issue.title,
        district_id=location.district_id,
        panchayat_union_id=location.panchayat_union_id,
        processed=False,
    )
    db.add(notification)
    await db.commit()
    await db.refresh(issue)
    await db.refresh(notification)

    logger.info(f"Issue {issue.id} submitted with notification {notification.id}")
    return issue, notification


async def get_issue_or_raise(db: AsyncSession, issue_id: UUID) -> Issue:
    issue = await get_issue_by_id(db, issue_id)
    if issue is None:
        raise IssueNotFoundError(issue_id)
    return issue


async def add_issue_photos(db: AsyncSession, issue: Issue, photo_urls: list[str], after: bool = False) -> Issue:
    """Append photo URLs in upload order to the before or after list."""
    current = list(issue.after_photos if after else issue.before_photos)
    if len(current) + len(photo_urls) > settings.MAX_PHOTOS_PER_ISSUE:
        raise PhotoLimitExceededError(f"An issue can have at most {settings.MAX_PHOTOS_PER_ISSUE} photos of each kind")

    # Reassign rather than mutate so the JSON column is flagged dirty
    if after:
        issue.after_photos = current + photo_urls
    else:
        issue.before_photos = current + photo_urls
    await db.commit()
    await db.refresh(issue)
    return issue


async def update_issue_status(
    db: AsyncSession,
    issue: Issue,
    status: IssueStatus,
    changed_by: AdminUser,
    notes: str | None = None,
) -> Issue:
    """
    Set an issue's status. Any status may follow any other; the lifecycle is
    advisory. Reaching resolved stamps resolved_at/resolved_by, which are kept
    if the issue later moves on (closed) or back.
    """
    previous = issue.status
    issue.status = status
    if status == IssueStatus.RESOLVED:
        issue.resolved_at = datetime.now(UTC)
        issue.resolved_by = changed_by.id
    if notes:
        issue.resolution_notes = notes

    await db.commit()
    await db.refresh(issue)
    logger.info(f"Issue {issue.id} status {previous.value} -> {status.value} by {changed_by.id}")
    return issue


async def assign_issue(db: AsyncSession, issue: Issue, admin_id: str, assigned_by: AdminUser) -> Issue:
    assignee = await get_admin_user_by_id(db, admin_id)
    if assignee is None:
        raise AdminUserNotFoundError(admin_id)

    issue.assigned_to = assignee.name or assignee.phone
    issue.assigned_by = assigned_by.name or assigned_by.phone
    issue.status = IssueStatus.ASSIGNED
    await db.commit()
    await db.refresh(issue)
    logger.info(f"Issue {issue.id} assigned to {assignee.id} by {assigned_by.id}")
    return issue


def _round_half_up(value: float, step: str = "1") -> Decimal:
    # round() rounds halves to even, dashboard figures round them up
    return Decimal(str(value)).quantize(Decimal(step), rounding=ROUND_HALF_UP)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=UTC)


async def get_dashboard_stats(db: AsyncSession) -> DashboardStats:
    total_issues = 0
    resolved_issues = 0
    total_resolution_days = 0.0
    by_category: dict[str, int] = {}
    by_status: dict[str, int] = {}

    for category, status, created_at, resolved_at in await list_issues_for_stats(db):
        total_issues += 1
        by_category[category.value] = by_category.get(category.value, 0) + 1
        by_status[status.value] = by_status.get(status.value, 0) + 1

        if status in RESOLVED_STATUSES:
            resolved_issues += 1
            if created_at and resolved_at:
                elapsed = _as_utc(resolved_at) - _as_utc(created_at)
                total_resolution_days += elapsed.total_seconds() / SECONDS_PER_DAY

    avg_resolution_days = total_resolution_days / resolved_issues if resolved_issues else 0.0
    resolution_rate = resolved_issues / total_issues * 100 if total_issues else 0.0

    return DashboardStats(
        total_issues=total_issues,
        resolved_issues=resolved_issues,
        pending_issues=total_issues - resolved_issues,
        avg_resolution_days=float(_round_half_up(avg_resolution_days, "0.1")),
        resolution_rate=int(_round_half_up(resolution_rate)),
        by_category=by_category,
        by_status=by_status,
    )
