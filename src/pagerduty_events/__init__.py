"""
pagerduty-events

A client for the PagerDuty Events API v2: trigger, acknowledge and resolve
alerts, and record change events, from blocking or asyncio code.
"""

__version__ = "0.1.0"
__author__ = "pagerduty-events contributors"
__license__ = "Apache-2.0"

from .client import (
    AsyncEventsV2,
    EventsV2,
    EventsV2Error,
    HttpError,
    HttpNotAccepted,
    SerializationError,
    TransportError,
)
from .config.settings import Config, load_config
from .events import (
    Action,
    AlertAcknowledge,
    AlertResolve,
    AlertTrigger,
    AlertTriggerPayload,
    Change,
    ChangePayload,
    Event,
    Image,
    Link,
    Severity,
)

__all__ = [
    "EventsV2",
    "AsyncEventsV2",
    "EventsV2Error",
    "SerializationError",
    "TransportError",
    "HttpError",
    "HttpNotAccepted",
    "Event",
    "Change",
    "ChangePayload",
    "AlertTrigger",
    "AlertTriggerPayload",
    "AlertAcknowledge",
    "AlertResolve",
    "Severity",
    "Action",
    "Link",
    "Image",
    "Config",
    "load_config",
    "__version__",
    "__author__",
    "__license__",
]
