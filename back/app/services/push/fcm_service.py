# Standard library imports
import asyncio
from functools import lru_cache

# Third-party imports
import firebase_admin
from firebase_admin import credentials, messaging

# Local application imports
from app.core.monitoring.logging import get_contextual_logger
from app.schemas.notifications.push_schemas import MulticastResult, PushMessage, TokenDeliveryOutcome
from app.settings import settings

logger = get_contextual_logger(__name__)

# Firebase rejects multicast messages with more tokens than this
FCM_MULTICAST_LIMIT = 500

_APP_NAME = "janakural"


def _get_firebase_app() -> firebase_admin.App:
    try:
        return firebase_admin.get_app(_APP_NAME)
    except ValueError:
        if settings.FIREBASE_CREDENTIALS_PATH:
            credential = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
        else:
            credential = credentials.ApplicationDefault()
        options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
        return firebase_admin.initialize_app(credential, options, name=_APP_NAME)


class FCMService:
    """Best-effort multicast over Firebase Cloud Messaging."""

    def __init__(self, app: firebase_admin.App | None = None):
        self.app = app or _get_firebase_app()

    def _build_message(self, message: PushMessage, tokens: list[str]) -> messaging.MulticastMessage:
        webpush = None
        if message.link:
            webpush = messaging.WebpushConfig(fcm_options=messaging.WebpushFCMOptions(link=message.link))
        return messaging.MulticastMessage(
            tokens=tokens,
            notification=messaging.Notification(title=message.title, body=message.body),
            data=message.data,
            webpush=webpush,
        )

    async def send_multicast(self, message: PushMessage) -> MulticastResult:
        """
        Send one message to every token.

        Per-token failures (expired or unregistered tokens) are reported in the
        result, never raised. A chunk whose request fails outright counts every
        token in it as failed.
        Token indexes refer to message.tokens.
        """
        result = MulticastResult()
        for start in range(0, len(message.tokens), FCM_MULTICAST_LIMIT):
            chunk = message.tokens[start : start + FCM_MULTICAST_LIMIT]
            try:
                batch = await asyncio.to_thread(
                    messaging.send_each_for_multicast,
                    self._build_message(message, chunk),
                    app=self.app,
                )
            except Exception as e:
                logger.exception(f"Multicast chunk starting at token {start} failed: {e}")
                error = str(e) or e.__class__.__name__
                result.outcomes.extend(
                    TokenDeliveryOutcome(index=start + offset, token=token, success=False, error=error)
                    for offset, token in enumerate(chunk)
                )
                result.failure_count += len(chunk)
                continue

            for offset, response in enumerate(batch.responses):
                result.outcomes.append(
                    TokenDeliveryOutcome(
                        index=start + offset,
                        token=chunk[offset],
                        success=response.success,
                        message_id=response.message_id,
                        error=str(response.exception) if response.exception else None,
                    )
                )
            result.success_count += batch.success_count
            result.failure_count += batch.failure_count

        logger.info(
            f"Multicast finished: {result.success_count} delivered, {result.failure_count} failed "
            f"out of {len(message.tokens)} tokens"
        )
        return result


@lru_cache
def get_push_service() -> FCMService:
    return FCMService()
