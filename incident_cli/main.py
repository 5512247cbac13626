"""Main CLI entry point with command definitions."""

import click
import asyncio
from typing import Optional
from rich.markup import escape

from .client import (
    IncidentClient,
    ClientConnectionError,
    IncidentClientError,
    RequestRejectedError,
)
from .config import Config, ConfigError
from .ui import (
    console,
    print_error,
    print_success,
    print_info,
    print_validation_errors,
    format_incident,
    print_incident_table,
    show_progress,
)

STATUS_CHOICES = ["open", "in_progress", "resolved", "closed"]
PRIORITY_CHOICES = ["low", "medium", "high", "critical"]


def resolve_api_url(url: Optional[str]) -> str:
    """Use the --url option if given, else the configured URL."""
    if url:
        return url
    return Config().get_api_url()


@click.group()
@click.version_option(package_name="incident-service")
def cli():
    """Incident Management CLI - record incidents and review their AI triage."""
    pass


@cli.command()
@click.argument("title")
@click.argument("description")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="Initial status")
@click.option("--priority", type=click.Choice(PRIORITY_CHOICES), help="Priority")
@click.option("--url", help="Incident API URL (overrides config)")
def create(
    title: str,
    description: str,
    status: Optional[str],
    priority: Optional[str],
    url: Optional[str],
):
    """Create an incident and show its AI classification."""
    asyncio.run(create_async(title, description, status, priority, url))


async def create_async(
    title: str,
    description: str,
    status: Optional[str],
    priority: Optional[str],
    url: Optional[str],
):
    try:
        api_url = resolve_api_url(url)

        async with IncidentClient(base_url=api_url) as client:
            with show_progress() as progress:
                progress.add_task("Creating incident...", total=None)
                incident = await client.create_incident(
                    title, description, status=status, priority=priority
                )

        print_success(f"Incident created: {incident['id']}")
        console.print(format_incident(incident))

    except ConfigError as e:
        print_error(str(e))
    except RequestRejectedError as e:
        print_error(str(e))
        if isinstance(e.details, dict):
            print_validation_errors(e.details)
        elif e.details:
            print_info(str(e.details))
    except (ClientConnectionError, IncidentClientError) as e:
        print_error(str(e))


@cli.command(name="list")
@click.option("--url", help="Incident API URL (overrides config)")
def list_command(url: Optional[str]):
    """List all incidents."""
    asyncio.run(list_async(url))


async def list_async(url: Optional[str]):
    try:
        api_url = resolve_api_url(url)

        async with IncidentClient(base_url=api_url) as client:
            incidents = await client.list_incidents()
        print_incident_table(incidents)

    except ConfigError as e:
        print_error(str(e))
    except (ClientConnectionError, IncidentClientError) as e:
        print_error(str(e))


@cli.command()
@click.option("--url", help="Incident API URL (overrides config)")
def health(url: Optional[str]):
    """Check that the incident API is running."""
    asyncio.run(health_async(url))


async def health_async(url: Optional[str]):
    try:
        api_url = resolve_api_url(url)

        async with IncidentClient(base_url=api_url) as client:
            result = await client.health()

        print_success(
            f"{result.get('message', 'Service is up')} "
            f"(status: {result.get('status')}, version: {result.get('version')})"
        )

    except ConfigError as e:
        print_error(str(e))
    except (ClientConnectionError, IncidentClientError) as e:
        print_error(str(e))


@cli.group()
def config():
    """Manage CLI configuration."""
    pass


@config.command(name="set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set a configuration value."""
    try:
        cfg = Config()
        cfg.set(key.replace("-", "_"), value)
        print_success(f"Configuration updated: {key} = {value}")
    except ConfigError as e:
        print_error(str(e))


@config.command(name="get")
@click.argument("key")
def config_get(key: str):
    """Get a configuration value."""
    try:
        cfg = Config()
        value = cfg.get(key.replace("-", "_"))
        if value:
            console.print(f"{escape(key)} = {escape(str(value))}")
        else:
            print_info(f"Configuration key '{key}' not set")
    except ConfigError as e:
        print_error(str(e))


@config.command(name="list")
def config_list():
    """List all configuration values."""
    try:
        cfg = Config()
        config_data = cfg.get_all()

        if not config_data:
            print_info("No configuration set")
            return

        console.print("[bold]Configuration:[/bold]")
        for key, value in config_data.items():
            console.print(f"  {escape(key)} = {escape(str(value))}")

    except ConfigError as e:
        print_error(str(e))


if __name__ == "__main__":
    cli()
