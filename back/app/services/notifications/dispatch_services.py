# Standard library imports
from typing import Any
from uuid import UUID

# Third-party imports
from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from app.core.monitoring.logging import get_contextual_logger
from app.db_selectors.admin import list_admin_snapshots
from app.models.notifications.issue_notification import NEW_ISSUE_NOTIFICATION, IssueNotification
from app.schemas.notifications.notification_schemas import DispatchOutcome, DispatchStatus
from app.schemas.notifications.push_schemas import PushMessage
from app.services.notifications.resolver import resolve_audience
from app.services.push.fcm_service import FCMService
from app.settings import settings


def build_new_issue_message(notification: IssueNotification, tokens: list[str]) -> PushMessage:
    """Push message for a new issue; the data payload is what clients deep-link on."""
    issue_id = str(notification.issue_id)
    return PushMessage(
        tokens=tokens,
        title=settings.PUSH_NEW_ISSUE_TITLE,
        body=notification.title,
        data={"issueId": issue_id, "type": NEW_ISSUE_NOTIFICATION},
        link=settings.ADMIN_ISSUE_LINK_TEMPLATE.format(issue_id=issue_id),
    )


async def mark_notification_processed(db: AsyncSession, notification_id: UUID, **outcome: Any) -> None:
    """The single terminating write of a dispatch: processed flag, server timestamp and outcome."""
    await db.execute(
        update(IssueNotification)
        .where(IssueNotification.id == notification_id)
        .values(processed=True, processed_at=func.now(), **outcome)
        .execution_options(synchronize_session=False)
    )
    await db.commit()


async def dispatch_issue_notification(
    db: AsyncSession,
    notification: IssueNotification,
    push_service: FCMService,
) -> DispatchOutcome:
    """
    Fan a new-issue notification record out to the responsible administrators.

    Every run that gets past the type check ends with exactly one call to
    mark_notification_processed, whether nobody was reachable, delivery
    partially failed or the roster could not be read. A failure of that final
    write propagates so the task infrastructure can redeliver the event.
    """
    notification_id: UUID = notification.id
    logger = get_contextual_logger(__name__, notification_id=notification_id, issue_id=notification.issue_id)

    if notification.type != NEW_ISSUE_NOTIFICATION:
        logger.info(f"Skipping notification of type {notification.type!r}")
        return DispatchOutcome(notification_id=notification_id, status=DispatchStatus.SKIPPED)

    if notification.processed:
        # Redelivered event for a record that has already been handled
        logger.info("Notification already processed, not sending again")
        return DispatchOutcome(notification_id=notification_id, status=DispatchStatus.ALREADY_PROCESSED)

    try:
        roster = await list_admin_snapshots(db)
        audience = resolve_audience(notification.district_id, notification.panchayat_union_id, roster)
        tokens = audience.tokens
        logger.info(
            f"Matched {len(audience.matched)} admins, {len(audience.deliverable)} with a device token "
            f"({len(tokens)} distinct tokens)"
        )

        if not tokens:
            outcome = DispatchOutcome(
                notification_id=notification_id,
                status=DispatchStatus.NO_RECIPIENTS,
                matched_count=len(audience.matched),
            )
        else:
            result = await push_service.send_multicast(build_new_issue_message(notification, tokens))
            for failure in result.failures:
                logger.error(f"Failed to send to token {failure.index}: {failure.error}")
            outcome = DispatchOutcome(
                notification_id=notification_id,
                status=DispatchStatus.SENT,
                matched_count=len(audience.matched),
                recipient_count=len(tokens),
                success_count=result.success_count,
                failure_count=result.failure_count,
            )
            logger.info(f"Sent {result.success_count} notifications, {result.failure_count} failed")
    except Exception as e:
        logger.exception(f"Error sending notifications: {e}")
        # Roll back whatever the failed read left open before the terminating write
        await db.rollback()
        outcome = DispatchOutcome(
            notification_id=notification_id,
            status=DispatchStatus.FAILED,
            error=str(e) or e.__class__.__name__,
        )
        await mark_notification_processed(db, notification_id, error=outcome.error)
        return outcome

    if outcome.status == DispatchStatus.NO_RECIPIENTS:
        await mark_notification_processed(
            db,
            notification_id,
            matched_count=outcome.matched_count,
            recipient_count=0,
        )
    else:
        await mark_notification_processed(
            db,
            notification_id,
            matched_count=outcome.matched_count,
            recipient_count=outcome.recipient_count,
            success_count=outcome.success_count,
            failure_count=outcome.failure_count,
        )
    return outcome
