# Standard library imports
from typing import Any

# Third-party imports
from celery import Celery
from celery.signals import task_failure, task_prerun, task_retry, task_success

# Local application imports
from app.core.monitoring import _setup_sentry_logging
from app.settings import settings

celery_app = Celery(
    "janakural",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["app.tasks.issue_tasks"],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    worker_prefetch_multiplier=1,
    worker_concurrency=settings.CELERY_WORKER_CONCURRENCY,
    # At-least-once: a task whose worker dies is redelivered
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_track_started=True,
    task_time_limit=settings.CELERY_TASK_TIME_LIMIT,
    task_soft_time_limit=settings.CELERY_TASK_SOFT_TIME_LIMIT,
    worker_max_tasks_per_child=1000,
    worker_log_format="[%(asctime)s: %(levelname)s/%(processName)s] %(message)s",
    worker_task_log_format="[%(asctime)s: %(levelname)s/%(processName)s] [%(task_name)s(%(task_id)s)] %(message)s",
)

_setup_sentry_logging()


@task_prerun.connect  # type: ignore[misc]
def setup_task_logger(task_id: str, task: Any, *args: Any, **kwargs: Any) -> None:  # noqa: ARG001
    # Local application imports
    from app.core.monitoring.logging import get_contextual_logger

    task.request.logger = get_contextual_logger(
        task.name,
        task_id=task_id,
    )


@task_retry.connect  # type: ignore[misc]
def task_retry_handler(
    sender: Any = None,
    request: Any = None,
    reason: str | None = None,
    **kwargs: Any,  # noqa: ARG001
) -> None:
    # Local application imports
    from app.core.monitoring.logging import get_contextual_logger

    task_id = getattr(request, "id", None)
    logger = get_contextual_logger("celery.task.retry", task_id=task_id)
    logger.warning(f"Task {sender.name} (ID: {task_id}) is being retried. Reason: {reason}")


@task_failure.connect  # type: ignore[misc]
def task_failure_handler(
    sender: Any = None,
    task_id: str | None = None,
    exception: Exception | None = None,
    **kwargs: Any,  # noqa: ARG001
) -> None:
    # Local application imports
    from app.core.monitoring.logging import get_contextual_logger

    # Only unhandled errors get here, e.g. the final notification write failing
    logger = get_contextual_logger("celery.task.failure", task_id=task_id)
    logger.error(f"Task {sender.name} (ID: {task_id}) failed: {exception}")


@task_success.connect  # type: ignore[misc]
def task_success_handler(
    sender: Any | None = None,
    result: Any = None,
    **kwargs: Any,  # noqa: ARG001
) -> None:
    # Local application imports
    from app.core.monitoring.logging import get_contextual_logger

    logger = get_contextual_logger("celery.task.success")
    logger.info(f"Task {sender.name} completed successfully: {result}")  # type: ignore[union-attr]


if __name__ == "__main__":
    print("Registered tasks:")
    for task_name in sorted(celery_app.tasks.keys()):
        print(f"  - {task_name}")
