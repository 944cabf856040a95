# Standard library imports
from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

# Third-party imports
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.models.issues.issue import RESOLVED_STATUSES, Issue, IssueCategory, IssueStatus


async def get_issue_by_id(db: AsyncSession, issue_id: UUID) -> Issue | None:
    result = await db.execute(select(Issue).where(Issue.id == issue_id))
    return result.scalar_one_or_none()


async def list_issues(
    db: AsyncSession,
    statuses: Sequence[IssueStatus] | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[list[Issue], int]:
    """Issues newest first, optionally restricted to the given statuses, with the total count."""
    query = select(Issue)
    count_query = select(func.count()).select_from(Issue)
    if statuses:
        query = query.where(Issue.status.in_(statuses))
        count_query = count_query.where(Issue.status.in_(statuses))

    query = query.order_by(Issue.created_at.desc()).offset(offset)
    if limit is not None:
        query = query.limit(limit)

    total = (await db.execute(count_query)).scalar() or 0
    result = await db.execute(query)
    return list(result.scalars().all()), total


async def list_issues_by_phone(db: AsyncSession, phone: str) -> list[Issue]:
    result = await db.execute(
        select(Issue).where(Issue.submitter_phone == phone).order_by(Issue.created_at.desc())
    )
    return list(result.scalars().all())


async def list_resolved_issues(db: AsyncSession, limit: int) -> list[Issue]:
    """Resolved or closed issues for the before/after showcase, most recently resolved first."""
    result = await db.execute(
        select(Issue)
        .where(Issue.status.in_(RESOLVED_STATUSES))
        .order_by(Issue.resolved_at.desc().nulls_last(), Issue.updated_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def list_issues_for_stats(
    db: AsyncSession,
) -> list[tuple[IssueCategory, IssueStatus, datetime | None, datetime | None]]:
    """(category, status, created_at, resolved_at) for every issue."""
    result = await db.execute(select(Issue.category, Issue.status, Issue.created_at, Issue.resolved_at))
    return [tuple(row) for row in result.all()]
