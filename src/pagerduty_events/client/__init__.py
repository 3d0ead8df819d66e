"""Events API v2 clients, transports and errors."""

from .errors import (
    EventsV2Error,
    HttpError,
    HttpNotAccepted,
    SerializationError,
    TransportError,
)
from .events_v2 import ALERT_EVENTS_URL, CHANGE_EVENTS_URL, AsyncEventsV2, EventsV2
from .transport import AiohttpTransport, AsyncTransport, HttpxTransport, Transport

__all__ = [
    "EventsV2",
    "AsyncEventsV2",
    "ALERT_EVENTS_URL",
    "CHANGE_EVENTS_URL",
    "Transport",
    "AsyncTransport",
    "HttpxTransport",
    "AiohttpTransport",
    "EventsV2Error",
    "SerializationError",
    "TransportError",
    "HttpError",
    "HttpNotAccepted",
]
