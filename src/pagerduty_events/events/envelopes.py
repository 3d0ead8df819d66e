"""
Wire envelopes for the PagerDuty Events API v2.

Enrichment turns a caller-facing event into the envelope that is actually
sent: the configured integration key becomes the ``routing_key`` and alert
envelopes get an explicit ``event_action``. Envelopes only live for the
duration of a single dispatch.
"""

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

import structlog

from .types import (
    DEDUP_KEY_MAX_LENGTH,
    SUMMARY_MAX_LENGTH,
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
    format_timestamp,
    images_to_list,
    links_to_list,
)

logger = structlog.get_logger(__name__)


@dataclass
class SendableChange:
    """Change event with the routing key filled in."""

    routing_key: str
    payload: ChangePayload
    links: Optional[List[Link]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "routing_key": self.routing_key,
            "payload": self.payload.to_dict(),
        }
        links = links_to_list(self.links)
        if links is not None:
            data["links"] = links
        return data


@dataclass
class SendableAlertTrigger:
    """Alert trigger with the routing key and event action filled in."""

    routing_key: str
    payload: AlertTriggerPayload
    dedup_key: Optional[str] = None
    images: Optional[List[Image]] = None
    links: Optional[List[Link]] = None
    event_action: Action = Action.TRIGGER
    client: Optional[str] = None
    client_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "routing_key": self.routing_key,
            "payload": self.payload.to_dict(),
        }
        optional_fields = (
            ("dedup_key", self.dedup_key),
            ("images", images_to_list(self.images)),
            ("links", links_to_list(self.links)),
        )
        for key, value in optional_fields:
            if value is not None:
                data[key] = value

        data["event_action"] = Action(self.event_action).value

        if self.client is not None:
            data["client"] = self.client
        if self.client_url is not None:
            data["client_url"] = self.client_url
        return data


@dataclass
class SendableAlertFollowup:
    """Acknowledge or resolve referencing a triggered incident."""

    routing_key: str
    dedup_key: str
    event_action: Action

    def to_dict(self) -> Dict[str, Any]:
        return {
            "routing_key": self.routing_key,
            "dedup_key": self.dedup_key,
            "event_action": Action(self.event_action).value,
        }


Envelope = Union[SendableChange, SendableAlertTrigger, SendableAlertFollowup]


def _warn_on_length(field_name: str, value: Optional[str], limit: int) -> None:
    """Log fields longer than the service accepts; the service has the final say."""
    if value is not None and len(value) > limit:
        logger.warning(
            "Field exceeds documented length limit",
            field=field_name,
            length=len(value),
            limit=limit,
        )


def enrich(event: Event, integration_key: str) -> Envelope:
    """
    Build the wire envelope for an event.

    The routing key always comes from ``integration_key``. Acknowledge and
    resolve events keep only their dedup key.

    Args:
        event: Caller-facing event
        integration_key: Integration key of the target service

    Returns:
        Envelope ready for serialization

    Raises:
        TypeError: If ``event`` is not a known event type
    """
    if isinstance(event, Change):
        _warn_on_length("summary", event.payload.summary, SUMMARY_MAX_LENGTH)
        return SendableChange(
            routing_key=integration_key,
            payload=event.payload,
            links=event.links,
        )

    if isinstance(event, AlertTrigger):
        _warn_on_length("summary", event.payload.summary, SUMMARY_MAX_LENGTH)
        _warn_on_length("dedup_key", event.dedup_key, DEDUP_KEY_MAX_LENGTH)
        return SendableAlertTrigger(
            routing_key=integration_key,
            payload=event.payload,
            dedup_key=event.dedup_key,
            images=event.images,
            links=event.links,
            event_action=Action.TRIGGER,
            client=event.client,
            client_url=event.client_url,
        )

    if isinstance(event, AlertAcknowledge):
        _warn_on_length("dedup_key", event.dedup_key, DEDUP_KEY_MAX_LENGTH)
        return SendableAlertFollowup(
            routing_key=integration_key,
            dedup_key=event.dedup_key,
            event_action=Action.ACKNOWLEDGE,
        )

    if isinstance(event, AlertResolve):
        _warn_on_length("dedup_key", event.dedup_key, DEDUP_KEY_MAX_LENGTH)
        return SendableAlertFollowup(
            routing_key=integration_key,
            dedup_key=event.dedup_key,
            event_action=Action.RESOLVE,
        )

    raise TypeError(f"Unsupported event type: {type(event).__name__}")


def encode_custom_details(value: Any) -> Any:
    """
    ``json.dumps`` default hook for caller-supplied custom details.

    Handles dataclasses, objects with ``to_dict()``, pydantic models and
    datetimes. Anything else is rejected with ``TypeError``.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, datetime):
        return format_timestamp(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
