# Local application imports
from app.services.push.fcm_service import FCMService, get_push_service

__all__ = ["FCMService", "get_push_service"]
