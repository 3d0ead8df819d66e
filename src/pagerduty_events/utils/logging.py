"""
Logging setup for pagerduty-events.

The library itself only emits events through module-level structlog
loggers; applications and the CLI call ``setup_logging`` once to decide how
those events are rendered.
"""

import logging
import sys
from typing import Any, MutableMapping

import structlog

from ..config.settings import LoggingConfig

# Keys that may carry an integration key and must never reach a log sink.
SECRET_KEYS = ("routing_key", "integration_key")

# HTTP libraries that log every request at INFO/DEBUG.
NOISY_LOGGERS = ("httpx", "httpcore", "aiohttp")


def redact_secrets(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking integration keys in event fields."""
    for key in SECRET_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str) and value:
            event_dict[key] = f"{value[:4]}***"
    return event_dict


def setup_logging(logging_config: LoggingConfig) -> None:
    """
    Configure structlog and stdlib logging from the ``logging`` config section.

    ``console`` renders human-readable lines for terminal use; ``json``
    renders one JSON document per line for log shippers. Output goes to
    stderr so command output on stdout stays parseable.
    """
    if logging_config.log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, logging_config.log_level),
    )
    logging.getLogger("pagerduty_events").setLevel(logging_config.log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
