from .notification_schemas import Audience, DispatchOutcome, DispatchStatus
from .push_schemas import MulticastResult, PushMessage, TokenDeliveryOutcome

__all__ = [
    "Audience",
    "DispatchOutcome",
    "DispatchStatus",
    "MulticastResult",
    "PushMessage",
    "TokenDeliveryOutcome",
]
