"""
Pytest configuration and fixtures for pagerduty-events tests.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List
from unittest.mock import AsyncMock

import httpx
import pytest
import structlog

from pagerduty_events.client import AsyncEventsV2, AsyncTransport, EventsV2, HttpxTransport
from pagerduty_events.events import (
    AlertTrigger,
    AlertTriggerPayload,
    Change,
    ChangePayload,
    Image,
    Link,
    Severity,
)

INTEGRATION_KEY = "routingkey"
USER_AGENT = "pagerduty-events test"

# Unix time 2000071804.323
TIMESTAMP = datetime(2033, 5, 18, 23, 30, 4, 323000, tzinfo=timezone.utc)


@dataclass
class SerializableTest:
    some_field: str
    another_field: int


class RecordingHandler:
    """httpx mock handler that records requests and answers with a fixed status."""

    def __init__(self, status_code: int = 202):
        self.status_code = status_code
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code)


@pytest.fixture
def handler():
    """Create a recording handler answering 202."""
    return RecordingHandler()


@pytest.fixture
def http_client(handler):
    """Create an httpx client backed by the recording handler."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    yield client
    client.close()


@pytest.fixture
def events_client(http_client):
    """Create a blocking client sending through the mock transport."""
    return EventsV2(
        INTEGRATION_KEY,
        user_agent=USER_AGENT,
        transport=HttpxTransport(client=http_client),
    )


@pytest.fixture
def mock_async_transport():
    """Create a mock asynchronous transport answering 202."""
    transport = AsyncMock(spec=AsyncTransport)
    transport.post.return_value = 202
    return transport


@pytest.fixture
def async_events_client(mock_async_transport):
    """Create an asynchronous client sending through the mock transport."""
    return AsyncEventsV2(INTEGRATION_KEY, user_agent=USER_AGENT, transport=mock_async_transport)


@pytest.fixture
def custom_details():
    return SerializableTest(some_field="Serialize this!", another_field=34)


@pytest.fixture
def link():
    return Link(href="https://polyverse.com", text="Polyverse homepage")


@pytest.fixture
def image():
    return Image(
        src="https://polyverse.com/static/img/SplashPageIMG/polyverse_blue.png",
        href="https://polyverse.com",
        alt="The Polyverse Logo",
    )


@pytest.fixture
def full_change(custom_details, link):
    """Create a change event with every optional field set."""
    return Change(
        payload=ChangePayload(
            summary="Hello",
            timestamp=TIMESTAMP,
            source="hostname",
            custom_details=custom_details,
        ),
        links=[link],
    )


@pytest.fixture
def minimal_change():
    """Create a change event with no optional fields."""
    return Change(payload=ChangePayload(summary="Hello", timestamp=TIMESTAMP))


@pytest.fixture
def full_alert_trigger(custom_details, link, image):
    """Create an alert trigger with every optional field set."""
    return AlertTrigger(
        payload=AlertTriggerPayload(
            severity=Severity.INFO,
            summary="Hello",
            source="hostname",
            timestamp=TIMESTAMP,
            component="postgres",
            group="prod-datapipe",
            class_="deploy",
            custom_details=custom_details,
        ),
        dedup_key="dedupkey1",
        images=[image],
        links=[link],
        client="Zerotect",
        client_url="https://github.com/polyverse/zerotect",
    )


@pytest.fixture
def minimal_alert_trigger():
    """Create an alert trigger with no optional fields."""
    return AlertTrigger(
        payload=AlertTriggerPayload(
            severity=Severity.INFO,
            summary="Hello",
            source="hostname",
        )
    )


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration made by a test."""
    yield
    structlog.reset_defaults()
