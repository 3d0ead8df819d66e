"""
Unit tests for logging setup.
"""

import logging

import pytest
import structlog

from pagerduty_events.config.settings import LoggingConfig
from pagerduty_events.utils.logging import redact_secrets, setup_logging


def test_setup_logging_quiets_http_libraries():
    setup_logging(LoggingConfig(log_level="DEBUG"))

    assert structlog.is_configured()
    assert logging.getLogger("pagerduty_events").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
    assert logging.getLogger("aiohttp").level == logging.WARNING


@pytest.mark.parametrize(
    "log_format,renderer",
    [
        ("console", structlog.dev.ConsoleRenderer),
        ("json", structlog.processors.JSONRenderer),
    ],
)
def test_setup_logging_selects_renderer(log_format, renderer):
    setup_logging(LoggingConfig(log_format=log_format))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], renderer)
    assert redact_secrets in processors


class TestRedactSecrets:
    def test_masks_routing_and_integration_keys(self):
        event_dict = {
            "event": "Sending event",
            "routing_key": "R0123456789ABCDEF",
            "integration_key": "abcdef0123456789",
            "url": "https://events.pagerduty.com/v2/enqueue",
        }

        result = redact_secrets(None, "info", event_dict)

        assert result["routing_key"] == "R012***"
        assert result["integration_key"] == "abcd***"
        assert result["url"] == "https://events.pagerduty.com/v2/enqueue"

    def test_leaves_missing_and_empty_values(self):
        event_dict = {"event": "Sending event", "routing_key": ""}

        result = redact_secrets(None, "info", event_dict)

        assert result == {"event": "Sending event", "routing_key": ""}
