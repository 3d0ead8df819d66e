"""
Event definitions for the PagerDuty Events API v2.

Defines the caller-facing event variants and the value types shared
between them. Every model converts to its wire mapping with ``to_dict()``,
leaving out optional fields that are not set.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

SUMMARY_MAX_LENGTH = 1024
DEDUP_KEY_MAX_LENGTH = 255


class Severity(str, Enum):
    """Perceived severity of the impact to the affected system."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class Action(str, Enum):
    """
    Lifecycle verb attached to alert events.

    TRIGGER opens a new alert, or adds a trigger log entry to an open alert
    with the same dedup_key. ACKNOWLEDGE stops further notifications while
    someone works on the problem. RESOLVE closes the incident; later triggers
    with the same dedup_key open a new one.
    """

    TRIGGER = "trigger"
    ACKNOWLEDGE = "acknowledge"
    RESOLVE = "resolve"


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as RFC3339 in UTC with nanosecond precision.

    Naive datetimes are assumed to already be in UTC.

    Args:
        value: Datetime to format

    Returns:
        Timestamp such as ``2033-05-18T23:30:04.323000000Z``
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    # strftime('%Y') does not zero-pad years below 1000 on every platform.
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond:06d}000Z"
    )


def _set_if_present(target: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        target[key] = value


@dataclass
class Link:
    """Link attached to an event."""

    # URL of the link to be attached.
    href: str
    # Plain text describing the purpose of the link.
    text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"href": self.href}
        _set_if_present(data, "text", self.text)
        return data


@dataclass
class Image:
    """Image attached to an alert. ``src`` must be served over HTTPS."""

    src: str
    href: Optional[str] = None
    alt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"src": self.src}
        _set_if_present(data, "href", self.href)
        _set_if_present(data, "alt", self.alt)
        return data


def links_to_list(links: Optional[List[Link]]) -> Optional[List[Dict[str, Any]]]:
    """Convert an optional list of links to wire format."""
    if links is None:
        return None
    return [link.to_dict() for link in links]


def images_to_list(images: Optional[List[Image]]) -> Optional[List[Dict[str, Any]]]:
    """Convert an optional list of images to wire format."""
    if images is None:
        return None
    return [image.to_dict() for image in images]


@dataclass
class ChangePayload:
    """Payload of a change event."""

    # Brief text summary, at most 1024 characters.
    summary: str
    # When the emitting tool detected or generated the change.
    timestamp: datetime
    # Unique name of the location where the change occurred.
    source: Optional[str] = None
    # Any serializable value with additional details.
    custom_details: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "summary": self.summary,
            "timestamp": format_timestamp(self.timestamp),
        }
        _set_if_present(data, "source", self.source)
        _set_if_present(data, "custom_details", self.custom_details)
        return data


@dataclass
class Change:
    """One-shot change-tracking event."""

    payload: ChangePayload
    links: Optional[List[Link]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"payload": self.payload.to_dict()}
        _set_if_present(data, "links", links_to_list(self.links))
        return data


@dataclass
class AlertTriggerPayload:
    """Payload of an alert trigger."""

    severity: Severity
    # Used for the summaries/titles of associated alerts, at most 1024 characters.
    summary: str
    # Unique location of the affected system, preferably a hostname or FQDN.
    source: str
    timestamp: Optional[datetime] = None
    # Responsible component of the source machine, for example mysql or eth0.
    component: Optional[str] = None
    # Logical grouping of components, for example app-stack.
    group: Optional[str] = None
    # Class/type of the event, for example ping failure. Sent as "class".
    class_: Optional[str] = None
    custom_details: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "severity": Severity(self.severity).value,
            "summary": self.summary,
            "source": self.source,
        }
        if self.timestamp is not None:
            data["timestamp"] = format_timestamp(self.timestamp)
        _set_if_present(data, "component", self.component)
        _set_if_present(data, "group", self.group)
        _set_if_present(data, "class", self.class_)
        _set_if_present(data, "custom_details", self.custom_details)
        return data


@dataclass
class AlertTrigger:
    """Opens or re-triggers an incident keyed by ``dedup_key``."""

    payload: AlertTriggerPayload
    # Correlates triggers with later acknowledges and resolves, at most 255 characters.
    dedup_key: Optional[str] = None
    images: Optional[List[Image]] = None
    links: Optional[List[Link]] = None
    # Name of the client creating this event.
    client: Optional[str] = None
    client_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"payload": self.payload.to_dict()}
        _set_if_present(data, "dedup_key", self.dedup_key)
        _set_if_present(data, "images", images_to_list(self.images))
        _set_if_present(data, "links", links_to_list(self.links))
        _set_if_present(data, "client", self.client)
        _set_if_present(data, "client_url", self.client_url)
        return data


@dataclass
class AlertAcknowledge:
    """Acknowledges the incident opened with ``dedup_key``."""

    dedup_key: str

    def to_dict(self) -> Dict[str, Any]:
        return {"dedup_key": self.dedup_key}


@dataclass
class AlertResolve:
    """Resolves the incident opened with ``dedup_key``."""

    dedup_key: str

    def to_dict(self) -> Dict[str, Any]:
        return {"dedup_key": self.dedup_key}


Event = Union[Change, AlertTrigger, AlertAcknowledge, AlertResolve]
