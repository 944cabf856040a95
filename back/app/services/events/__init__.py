# Local application imports
from app.services.events.event_publisher import CeleryEventPublisher, get_event_publisher

__all__ = ["CeleryEventPublisher", "get_event_publisher"]
