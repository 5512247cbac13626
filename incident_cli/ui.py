"""Terminal UI components and formatting."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box
from rich.markup import escape
from typing import Dict, Any, List
from datetime import datetime


console = Console()

SEVERITY_COLORS = {"high": "red", "medium": "yellow", "low": "green"}

STATUS_COLORS = {
    "open": "yellow",
    "in_progress": "blue",
    "resolved": "green",
    "closed": "dim",
}


def print_error(message: str):
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_success(message: str):
    console.print(f"[bold green]✓[/bold green] {escape(message)}")


def print_info(message: str):
    console.print(f"[bold blue]ℹ[/bold blue] {escape(message)}")


def print_validation_errors(details: Dict[str, str]):
    """Print per-field validation messages."""
    for field, message in sorted(details.items()):
        console.print(f"  [red]•[/red] {escape(field)}: {escape(message)}")


def colorize(value: str, colors: Dict[str, str]) -> str:
    color = colors.get(value, "white")
    return f"[{color}]{escape(value)}[/{color}]"


def format_timestamp(timestamp: str) -> str:
    """Format ISO timestamp to readable format."""
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, AttributeError):
        return timestamp


def format_incident(incident: Dict[str, Any]) -> Panel:
    """
    Format incident data for display.

    Args:
        incident: Incident data dictionary

    Returns:
        Rich Panel with formatted incident
    """
    lines = [
        f"[bold]Incident ID:[/bold] {escape(incident['id'])}",
        f"[bold]Title:[/bold] {escape(incident['title'])}",
        f"[bold]Status:[/bold] {colorize(incident['status'], STATUS_COLORS)}",
        f"[bold]Priority:[/bold] {escape(incident['priority'])}",
        f"[bold]AI Severity:[/bold] {colorize(incident['ai_severity'], SEVERITY_COLORS)}",
        f"[bold]AI Category:[/bold] {escape(incident['ai_category'])}",
        f"[bold]Created:[/bold] {escape(format_timestamp(incident['created_at']))}",
        "",
        "[bold]Description:[/bold]",
        escape(incident["description"]),
    ]

    return Panel(
        "\n".join(lines),
        title=f"Incident {escape(incident['id'][:8])}",
        border_style="blue",
        box=box.ROUNDED,
    )


def print_incident_table(incidents: List[Dict[str, Any]]):
    """
    Print a table of incidents.

    Args:
        incidents: List of incident dictionaries
    """
    if not incidents:
        print_info("No incidents found.")
        return

    table = Table(title="Incidents", box=box.ROUNDED)

    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Status")
    table.add_column("Priority", style="magenta")
    table.add_column("Severity")
    table.add_column("Category", style="blue")
    table.add_column("Created", style="green")

    for incident in incidents:
        title = incident["title"]
        if len(title) > 40:
            title = title[:40] + "..."

        table.add_row(
            escape(incident["id"][:8]) + "...",
            escape(title),
            colorize(incident["status"], STATUS_COLORS),
            escape(incident["priority"]),
            colorize(incident["ai_severity"], SEVERITY_COLORS),
            escape(incident["ai_category"]),
            escape(format_timestamp(incident["created_at"])),
        )

    console.print(table)


def show_progress() -> Progress:
    """Create a transient spinner for long-running requests."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    )
