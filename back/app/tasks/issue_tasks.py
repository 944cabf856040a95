"""
Celery consumers for "record created" events.

Each task receives the id of a freshly created record, opens its own session
and hands the record to the service-layer handler. Tasks never retry on their
own; redelivery is left to the broker (acks_late).
"""

# Standard library imports
from typing import Any
from uuid import UUID

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.celery import celery_app
from app.core.db import run_with_new_session
from app.core.monitoring.logging import get_contextual_logger
from app.db_selectors.issues import get_issue_by_id
from app.db_selectors.notifications import get_notification_by_id
from app.services.issues.assignment_services import auto_assign_issue
from app.services.notifications.dispatch_services import dispatch_issue_notification
from app.services.push.fcm_service import get_push_service
from app.utils.celery_utils import celery_async_task


async def handle_issue_created(db: AsyncSession, issue_id: UUID) -> str | None:
    issue = await get_issue_by_id(db, issue_id)
    if issue is None:
        get_contextual_logger(__name__, issue_id=issue_id).warning("Issue not found, nothing to assign")
        return None

    assignee = await auto_assign_issue(db, issue)
    return assignee.id if assignee else None


async def handle_notification_created(db: AsyncSession, notification_id: UUID) -> dict[str, Any] | None:
    notification = await get_notification_by_id(db, notification_id)
    if notification is None:
        get_contextual_logger(__name__, notification_id=notification_id).warning("Notification not found")
        return None

    outcome = await dispatch_issue_notification(db, notification, get_push_service())
    return outcome.model_dump(mode="json")


@celery_app.task(name="issues.auto_assign")
@celery_async_task
async def auto_assign_issue_task(issue_id: str) -> str | None:
    return await run_with_new_session(handle_issue_created, UUID(issue_id))


@celery_app.task(name="notifications.dispatch_new_issue")
@celery_async_task
async def dispatch_issue_notification_task(notification_id: str) -> dict[str, Any] | None:
    return await run_with_new_session(handle_notification_created, UUID(notification_id))
