"""
Command-line interface for pagerduty-events.

Sends alert and change events to the PagerDuty Events API v2 using the
integration key from configuration or the PAGERDUTY_INTEGRATION_KEY
environment variable.
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Tuple

import click
import structlog

from .client import EventsV2, EventsV2Error
from .config.settings import Config, create_default_config, load_config
from .events import (
    AlertAcknowledge,
    AlertResolve,
    AlertTrigger,
    AlertTriggerPayload,
    Change,
    ChangePayload,
    Event,
    Link,
    Severity,
)
from .utils.logging import setup_logging


def _parse_links(values: Tuple[str, ...]) -> Optional[List[Link]]:
    """Parse ``HREF`` or ``HREF|TEXT`` option values."""
    if not values:
        return None
    links = []
    for value in values:
        href, _, text = value.partition("|")
        links.append(Link(href=href, text=text or None))
    return links


def _parse_details(value: Optional[str]) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--details")


def _send(ctx: click.Context, event: Event) -> None:
    """Send an event with a client built from the loaded configuration."""
    config: Config = ctx.obj["config"]
    logger = structlog.get_logger()

    if not config.pagerduty.integration_key:
        click.echo("PAGERDUTY_INTEGRATION_KEY environment variable is required", err=True)
        sys.exit(1)

    client = EventsV2.from_config(config)
    try:
        client.event(event)
    except EventsV2Error as e:
        logger.error("Event delivery failed", event_type=type(event).__name__, error=e.message)
        click.echo(f"Failed to send event: {e.message}", err=True)
        sys.exit(1)

    click.echo(f"{type(event).__name__} accepted")


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Set logging level",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    help="Render logs for a terminal or as JSON lines",
)
@click.version_option(package_name="pagerduty-events")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """Send events to the PagerDuty Events API v2."""
    if ctx.invoked_subcommand == "init-config":
        return

    try:
        config_data = load_config(config_path=config)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Failed to load configuration: {e}", err=True)
        sys.exit(1)

    if log_level:
        config_data.logging.log_level = log_level.upper()
    if log_format:
        config_data.logging.log_format = log_format.lower()

    setup_logging(config_data.logging)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config_data


@cli.command()
@click.option("--summary", required=True, help="Brief text summary of the alert")
@click.option("--source", required=True, help="Affected system, preferably a hostname or FQDN")
@click.option(
    "--severity",
    type=click.Choice([s.value for s in Severity]),
    default=Severity.ERROR.value,
    show_default=True,
)
@click.option("--dedup-key", help="Deduplication key for later acknowledge/resolve")
@click.option("--component", help="Responsible component, for example mysql")
@click.option("--group", help="Logical grouping of components")
@click.option("--class", "class_", help="Class/type of the event")
@click.option("--client", "client_name", help="Name of the client creating the event")
@click.option("--client-url", help="URL of the client")
@click.option("--link", "links", multiple=True, help="Link as HREF or HREF|TEXT")
@click.option("--details", help="Custom details as a JSON document")
@click.pass_context
def trigger(
    ctx: click.Context,
    summary: str,
    source: str,
    severity: str,
    dedup_key: Optional[str],
    component: Optional[str],
    group: Optional[str],
    class_: Optional[str],
    client_name: Optional[str],
    client_url: Optional[str],
    links: Tuple[str, ...],
    details: Optional[str],
) -> None:
    """Trigger an alert."""
    event = AlertTrigger(
        payload=AlertTriggerPayload(
            severity=Severity(severity),
            summary=summary,
            source=source,
            timestamp=datetime.now(timezone.utc),
            component=component,
            group=group,
            class_=class_,
            custom_details=_parse_details(details),
        ),
        dedup_key=dedup_key,
        links=_parse_links(links),
        client=client_name,
        client_url=client_url,
    )
    _send(ctx, event)


@cli.command()
@click.argument("dedup_key")
@click.pass_context
def acknowledge(ctx: click.Context, dedup_key: str) -> None:
    """Acknowledge the incident opened with DEDUP_KEY."""
    _send(ctx, AlertAcknowledge(dedup_key=dedup_key))


@cli.command()
@click.argument("dedup_key")
@click.pass_context
def resolve(ctx: click.Context, dedup_key: str) -> None:
    """Resolve the incident opened with DEDUP_KEY."""
    _send(ctx, AlertResolve(dedup_key=dedup_key))


@cli.command()
@click.option("--summary", required=True, help="Brief text summary of the change")
@click.option("--source", help="Where the change occurred")
@click.option("--link", "links", multiple=True, help="Link as HREF or HREF|TEXT")
@click.option("--details", help="Custom details as a JSON document")
@click.pass_context
def change(
    ctx: click.Context,
    summary: str,
    source: Optional[str],
    links: Tuple[str, ...],
    details: Optional[str],
) -> None:
    """Record a change event timestamped now."""
    event = Change(
        payload=ChangePayload(
            summary=summary,
            timestamp=datetime.now(timezone.utc),
            source=source,
            custom_details=_parse_details(details),
        ),
        links=_parse_links(links),
    )
    _send(ctx, event)


@cli.command(name="init-config")
@click.argument("config_path", type=click.Path(path_type=Path), default="pagerduty-events.json")
def init_config(config_path: Path) -> None:
    """Initialize a configuration file with default settings."""
    if config_path.exists():
        click.echo(f"Configuration file already exists: {config_path}")
        if not click.confirm("Overwrite?"):
            return

    try:
        create_default_config(config_path)
    except OSError as e:
        click.echo(f"Failed to create configuration file: {e}", err=True)
        sys.exit(1)

    click.echo(f"Created configuration file: {config_path}")
    click.echo("\nNext steps:")
    click.echo("   export PAGERDUTY_INTEGRATION_KEY='your-integration-key'")


if __name__ == "__main__":
    cli()
