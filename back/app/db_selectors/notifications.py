# Standard library imports
from uuid import UUID

# Third-party imports
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.models.notifications.issue_notification import IssueNotification


async def get_notification_by_id(db: AsyncSession, notification_id: UUID) -> IssueNotification | None:
    result = await db.execute(select(IssueNotification).where(IssueNotification.id == notification_id))
    return result.scalar_one_or_none()
