# Local application imports
from app.core.celery.celery import celery_app

__all__ = ["celery_app"]
