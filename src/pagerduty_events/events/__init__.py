"""
Event model for the PagerDuty Events API v2.

Caller-facing event types and the wire envelopes built from them.
"""

from .types import (
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
    format_timestamp,
)

__all__ = [
    "Action",
    "AlertAcknowledge",
    "AlertResolve",
    "AlertTrigger",
    "AlertTriggerPayload",
    "Change",
    "ChangePayload",
    "Event",
    "Image",
    "Link",
    "Severity",
    "format_timestamp",
]
