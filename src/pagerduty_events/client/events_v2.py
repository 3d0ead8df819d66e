"""
PagerDuty Events API v2 clients.

``EventsV2`` sends events from the calling thread; ``AsyncEventsV2`` sends
them from a coroutine. Both share endpoint routing, enrichment,
serialization and response classification, and differ only in their
transport.
"""

import json
from typing import Any, Dict, Optional, Tuple

import structlog

from ..events.envelopes import Envelope, encode_custom_details, enrich
from ..events.types import AlertAcknowledge, AlertResolve, AlertTrigger, Change, Event
from .errors import EventsV2Error, HttpError, HttpNotAccepted, SerializationError
from .transport import (
    DEFAULT_TIMEOUT_SECONDS,
    AiohttpTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
)

logger = structlog.get_logger(__name__)

ALERT_EVENTS_URL = "https://events.pagerduty.com/v2/enqueue"
CHANGE_EVENTS_URL = "https://events.pagerduty.com/v2/change/enqueue"

CONTENT_TYPE = "content-type"
CONTENT_ENCODING = "content-encoding"
USER_AGENT = "user-agent"

CONTENT_TYPE_JSON = "application/json"
CONTENT_ENCODING_IDENTITY = "identity"

ACCEPTED_STATUS = 202


def endpoint_for(event: Event) -> str:
    """Return the endpoint URL an event must be posted to."""
    if isinstance(event, Change):
        return CHANGE_EVENTS_URL
    if isinstance(event, (AlertTrigger, AlertAcknowledge, AlertResolve)):
        return ALERT_EVENTS_URL
    raise TypeError(f"Unsupported event type: {type(event).__name__}")


def serialize_envelope(envelope: Envelope) -> bytes:
    """
    Encode an envelope as compact JSON.

    Raises:
        SerializationError: If the custom details cannot be encoded
    """
    try:
        return json.dumps(
            envelope.to_dict(),
            default=encode_custom_details,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize event: {str(e)}", original_error=e)


def build_headers(user_agent: Optional[str] = None) -> Dict[str, str]:
    """Build the fixed request headers."""
    headers = {
        CONTENT_TYPE: CONTENT_TYPE_JSON,
        CONTENT_ENCODING: CONTENT_ENCODING_IDENTITY,
    }
    if user_agent:
        headers[USER_AGENT] = user_agent
    return headers


def classify_status(status: int) -> None:
    """
    Turn a response status into a result.

    202 is the only success. 4xx and 5xx raise ``HttpError``; anything else
    raises ``HttpNotAccepted``.
    """
    if status == ACCEPTED_STATUS:
        return None
    if 400 <= status < 600:
        raise HttpError(status)
    raise HttpNotAccepted(status)


class _EventsV2Base:
    """Configuration and request preparation shared by both clients."""

    def __init__(self, integration_key: str, user_agent: Optional[str] = None):
        if not integration_key:
            raise ValueError("integration_key is required")
        self._integration_key = integration_key
        self._user_agent = user_agent
        self._headers = build_headers(user_agent)

    @property
    def user_agent(self) -> Optional[str]:
        return self._user_agent

    def _prepare(self, event: Event) -> Tuple[str, bytes]:
        url = endpoint_for(event)
        body = serialize_envelope(enrich(event, self._integration_key))
        logger.debug(
            "Sending event",
            event_type=type(event).__name__,
            url=url,
            body_size=len(body),
        )
        return url, body

    def _handle_status(self, event: Event, url: str, status: int) -> None:
        try:
            classify_status(status)
        except EventsV2Error:
            logger.warning(
                "Event not accepted",
                event_type=type(event).__name__,
                url=url,
                status_code=status,
            )
            raise
        logger.debug("Event accepted", event_type=type(event).__name__, url=url)


class EventsV2(_EventsV2Base):
    """
    Blocking client for the PagerDuty Events API v2.

    Each call to ``event()`` performs a single POST and blocks the calling
    thread until the service answers or the timeout elapses. The client is
    safe to share between threads.
    """

    def __init__(
        self,
        integration_key: str,
        user_agent: Optional[str] = None,
        transport: Optional[Transport] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the client.

        Args:
            integration_key: Integration key of the target service
            user_agent: Value for the User-Agent header, if any
            transport: Transport to send requests with
            timeout_seconds: Request timeout for the default transport
        """
        super().__init__(integration_key, user_agent)
        self._transport = transport or HttpxTransport(timeout_seconds=timeout_seconds)

    @classmethod
    def from_config(cls, config: Any, transport: Optional[Transport] = None) -> "EventsV2":
        """Create a client from a loaded ``Config``."""
        return cls(
            integration_key=config.pagerduty.integration_key,
            user_agent=config.pagerduty.user_agent,
            transport=transport,
            timeout_seconds=config.pagerduty.timeout_seconds,
        )

    def event(self, event: Event) -> None:
        """
        Send an event.

        Args:
            event: Change, AlertTrigger, AlertAcknowledge or AlertResolve

        Raises:
            SerializationError: If the event cannot be encoded
            TransportError: If no response was received
            HttpError: If the service answered with 4xx or 5xx
            HttpNotAccepted: If the service answered with any other non-202 status
        """
        url, body = self._prepare(event)
        status = self._transport.post(url, body, self._headers)
        self._handle_status(event, url, status)


class AsyncEventsV2(_EventsV2Base):
    """
    Asynchronous client for the PagerDuty Events API v2.

    ``event()`` only suspends while waiting on the network. No timeout is
    applied; wrap calls in ``asyncio.wait_for`` or cancel the task instead.
    """

    def __init__(
        self,
        integration_key: str,
        user_agent: Optional[str] = None,
        transport: Optional[AsyncTransport] = None,
    ):
        super().__init__(integration_key, user_agent)
        self._transport = transport or AiohttpTransport()

    @classmethod
    def from_config(
        cls, config: Any, transport: Optional[AsyncTransport] = None
    ) -> "AsyncEventsV2":
        """Create a client from a loaded ``Config``."""
        return cls(
            integration_key=config.pagerduty.integration_key,
            user_agent=config.pagerduty.user_agent,
            transport=transport,
        )

    async def event(self, event: Event) -> None:
        """Send an event. Raises the same errors as ``EventsV2.event``."""
        url, body = self._prepare(event)
        status = await self._transport.post(url, body, self._headers)
        self._handle_status(event, url, status)
