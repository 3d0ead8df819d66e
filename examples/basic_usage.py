#!/usr/bin/env python3
"""
Basic usage example for pagerduty-events.

Triggers an alert, acknowledges it and resolves it, then records a change
event. Set PAGERDUTY_INTEGRATION_KEY before running.
"""

import asyncio
import os
import sys
from datetime import datetime, timezone

from pagerduty_events import (
    AlertAcknowledge,
    AlertResolve,
    AlertTrigger,
    AlertTriggerPayload,
    AsyncEventsV2,
    Change,
    ChangePayload,
    EventsV2,
    EventsV2Error,
    Link,
    Severity,
)
from pagerduty_events.config.settings import LoggingConfig
from pagerduty_events.utils.logging import setup_logging


def run_blocking(integration_key: str) -> None:
    """Send an alert lifecycle with the blocking client."""
    client = EventsV2(integration_key, user_agent="pagerduty-events example")
    dedup_key = "example-disk-full"

    client.event(
        AlertTrigger(
            payload=AlertTriggerPayload(
                severity=Severity.WARNING,
                summary="Disk usage above 90% on db-1",
                source="db-1.example.com",
                timestamp=datetime.now(timezone.utc),
                component="postgres",
                custom_details={"used_percent": 93},
            ),
            dedup_key=dedup_key,
            links=[Link(href="https://runbooks.example.com/disk", text="Runbook")],
        )
    )
    print("✅ Triggered")

    client.event(AlertAcknowledge(dedup_key=dedup_key))
    print("✅ Acknowledged")

    client.event(AlertResolve(dedup_key=dedup_key))
    print("✅ Resolved")


async def run_async(integration_key: str) -> None:
    """Record a change event with the asyncio client."""
    client = AsyncEventsV2(integration_key, user_agent="pagerduty-events example")

    await client.event(
        Change(
            payload=ChangePayload(
                summary="Deployed api v2.3.1",
                timestamp=datetime.now(timezone.utc),
                source="ci.example.com",
            )
        )
    )
    print("✅ Change recorded")


def main() -> None:
    integration_key = os.getenv("PAGERDUTY_INTEGRATION_KEY")
    if not integration_key:
        print("❌ PAGERDUTY_INTEGRATION_KEY is not set")
        sys.exit(1)

    setup_logging(LoggingConfig(log_level="DEBUG"))

    try:
        run_blocking(integration_key)
        asyncio.run(run_async(integration_key))
    except EventsV2Error as e:
        print(f"❌ {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
