# Standard library imports
import logging

# Third-party imports
import sentry_sdk
from sentry_sdk.integrations.celery import CeleryIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

# Local application imports
from app.settings import settings


def _setup_sentry_logging() -> None:
    """
    Initialise Sentry for API processes and celery workers alike, so failures
    inside the notification and assignment handlers are reported even though
    they never reach an HTTP caller.
    """
    if settings.ENVIRONMENT != "production" or not settings.SENTRY_DSN:
        return

    if sentry_sdk.get_client().is_active():
        return

    sentry_logging = LoggingIntegration(
        level=logging.WARNING,  # Capture warnings and above as breadcrumbs
        event_level=logging.ERROR,  # Send errors as events
    )
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[sentry_logging, CeleryIntegration()],
        environment=settings.ENVIRONMENT,
        traces_sample_rate=1.0,
    )


# Call setup once at module import time
_setup_sentry_logging()
