# Standard library imports
from functools import lru_cache
from uuid import UUID

# Local application imports
from app.core.monitoring.logging import get_contextual_logger

logger = get_contextual_logger(__name__)


class CeleryEventPublisher:
    """
    Publishes "record created" events to the celery workers that react to them.

    Delivery is at-least-once (acks_late), so consumers must tolerate
    redelivery of the same record id.
    """

    def issue_created(self, issue_id: UUID) -> None:
        # Imported here so the API process does not pull in the task modules at import time
        from app.tasks.issue_tasks import auto_assign_issue_task

        auto_assign_issue_task.delay(str(issue_id))
        logger.debug(f"Published issue_created for {issue_id}")

    def notification_created(self, notification_id: UUID) -> None:
        from app.tasks.issue_tasks import dispatch_issue_notification_task

        dispatch_issue_notification_task.delay(str(notification_id))
        logger.debug(f"Published notification_created for {notification_id}")


@lru_cache
def get_event_publisher() -> CeleryEventPublisher:
    return CeleryEventPublisher()
