# Standard library imports
from datetime import UTC, datetime

# Third-party imports
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.monitoring.logging import get_contextual_logger
from app.db_selectors.admin import list_admin_snapshots
from app.models.issues.issue import Issue, IssueStatus
from app.schemas.admin.admin_user_schemas import AdminSnapshot
from app.services.notifications.resolver import resolve_assignee

AUTO_ASSIGNED_BY = "System (Auto-assignment)"


async def auto_assign_issue(db: AsyncSession, issue: Issue) -> AdminSnapshot | None:
    """
    Assign a newly created issue to the most specific responsible administrator.

    Best effort: without a district, or without a matching leader, nothing is
    written. Any failure is logged and swallowed, leaving the issue untouched.

    Returns:
        The administrator the issue was assigned to, or None.
    """
    issue_id = issue.id
    district_id = issue.district_id
    panchayat_union_id = issue.panchayat_union_id
    logger = get_contextual_logger(__name__, issue_id=issue_id)

    if not district_id:
        logger.info("No district specified, skipping auto-assignment")
        return None

    try:
        roster = await list_admin_snapshots(db)
        assignee = resolve_assignee(district_id, panchayat_union_id, roster)
        if assignee is None:
            logger.info(f"No leader found for district={district_id} panchayat_union={panchayat_union_id}")
            return None

        await db.execute(
            update(Issue)
            .where(Issue.id == issue_id)
            .values(
                assigned_to=assignee.display_name,
                assigned_by=AUTO_ASSIGNED_BY,
                status=IssueStatus.ASSIGNED,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        logger.info(f"Assigned to {assignee.role.value}: {assignee.display_name}")
        return assignee
    except Exception as e:
        logger.exception(f"Error auto-assigning issue: {e}")
        await db.rollback()
        return None
