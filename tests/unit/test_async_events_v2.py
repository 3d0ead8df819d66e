"""
Unit tests for the asynchronous Events API v2 client.
"""

import asyncio
import json

import pytest

from pagerduty_events.client import (
    ALERT_EVENTS_URL,
    CHANGE_EVENTS_URL,
    AsyncEventsV2,
    EventsV2,
    HttpError,
    HttpNotAccepted,
    HttpxTransport,
    SerializationError,
    TransportError,
)
from pagerduty_events.events import (
    AlertAcknowledge,
    AlertResolve,
    AlertTrigger,
    AlertTriggerPayload,
    Severity,
)


class TestAsyncEventsV2:
    """Test the asynchronous client."""

    @pytest.mark.asyncio
    async def test_change(self, async_events_client, mock_async_transport, full_change):
        await async_events_client.event(full_change)

        mock_async_transport.post.assert_awaited_once()
        url, body, headers = mock_async_transport.post.call_args.args
        assert url == CHANGE_EVENTS_URL
        assert json.loads(body)["routing_key"] == "routingkey"
        assert headers["user-agent"] == "pagerduty-events test"

    @pytest.mark.asyncio
    async def test_round_trip_body(self, async_events_client, mock_async_transport):
        event = AlertTrigger(
            payload=AlertTriggerPayload(
                severity=Severity.INFO, summary="Hello", source="hostname"
            ),
            dedup_key="dedupkey1",
        )

        await async_events_client.event(event)

        url, body, _ = mock_async_transport.post.call_args.args
        assert url == ALERT_EVENTS_URL
        assert body == (
            b'{"routing_key":"routingkey","payload":{"severity":"info","summary":"Hello",'
            b'"source":"hostname"},"dedup_key":"dedupkey1","event_action":"trigger"}'
        )

    @pytest.mark.asyncio
    async def test_same_wire_bytes_as_blocking_client(
        self, async_events_client, mock_async_transport, handler, http_client, full_alert_trigger
    ):
        blocking = EventsV2(
            "routingkey",
            user_agent="pagerduty-events test",
            transport=HttpxTransport(client=http_client),
        )

        blocking.event(full_alert_trigger)
        await async_events_client.event(full_alert_trigger)

        url, body, headers = mock_async_transport.post.call_args.args
        request = handler.requests[0]
        assert url == str(request.url)
        assert body == request.content
        for name, value in headers.items():
            assert request.headers[name] == value

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, error_class",
        [(400, HttpError), (503, HttpError), (201, HttpNotAccepted), (302, HttpNotAccepted)],
    )
    async def test_status_errors(
        self, async_events_client, mock_async_transport, minimal_change, status, error_class
    ):
        mock_async_transport.post.return_value = status

        with pytest.raises(error_class) as exc_info:
            await async_events_client.event(minimal_change)

        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_transport_error_propagates(
        self, async_events_client, mock_async_transport, minimal_change
    ):
        mock_async_transport.post.side_effect = TransportError("Connection refused")

        with pytest.raises(TransportError):
            await async_events_client.event(minimal_change)

    @pytest.mark.asyncio
    async def test_serialization_failure_sends_nothing(
        self, async_events_client, mock_async_transport
    ):
        event = AlertTrigger(
            payload=AlertTriggerPayload(
                severity=Severity.INFO,
                summary="Hello",
                source="hostname",
                custom_details={1, 2, 3},
            ),
        )

        with pytest.raises(SerializationError):
            await async_events_client.event(event)

        mock_async_transport.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_mix(self, async_events_client, mock_async_transport):
        async def slow_post(url, body, headers):
            await asyncio.sleep(0)
            return 202

        mock_async_transport.post.side_effect = slow_post
        events = [
            AlertAcknowledge(dedup_key=f"ack-{i}") if i % 2 else AlertResolve(dedup_key=f"res-{i}")
            for i in range(20)
        ]

        await asyncio.gather(*(async_events_client.event(e) for e in events))

        sent = {
            json.loads(call.args[1])["dedup_key"]: json.loads(call.args[1])["event_action"]
            for call in mock_async_transport.post.call_args_list
        }
        assert len(sent) == 20
        for key, action in sent.items():
            assert action == ("acknowledge" if key.startswith("ack-") else "resolve")

    @pytest.mark.asyncio
    async def test_cancellation(self, async_events_client, mock_async_transport, minimal_change):
        started = asyncio.Event()

        async def hang(url, body, headers):
            started.set()
            await asyncio.sleep(3600)

        mock_async_transport.post.side_effect = hang

        task = asyncio.ensure_future(async_events_client.event(minimal_change))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    def test_requires_integration_key(self):
        with pytest.raises(ValueError):
            AsyncEventsV2(None)
