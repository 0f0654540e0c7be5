"""Console reporting shared by the CLI commands."""

from rich.markup import escape
from rich.table import Table

from rice_cli.cli.configuration.options import SERVICE_TITLES
from rice_cli.cli.configuration.store import ExistingState
from rice_cli.cli.ui import console
from rice_cli.core.health import HealthCheckResult, HealthStatus

_STATUS_STYLES = {
    HealthStatus.REACHABLE: "[green]✔ Reachable[/green]",
    HealthStatus.UNREACHABLE: "[red]✖ Unreachable[/red]",
    HealthStatus.REJECTED: "[red]✖ Rejected[/red]",
    HealthStatus.SKIPPED: "[dim]Skipped[/dim]",
}


def report_load_warnings(state: ExistingState) -> None:
    """Print warnings about existing files that could not be used."""
    for message in state.warnings:
        console.print(f"[yellow]{escape(message)}[/yellow]")
    if state.warnings:
        console.print("[dim]Continuing without the ignored values.[/dim]")


def print_health_results(results: list[HealthCheckResult]) -> None:
    """Print a table of health check results.

    Args:
        results: Results in service order.
    """
    table = Table(title="Rice connectivity", show_header=True, header_style="bold cyan")
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Endpoint", style="bright_white")
    table.add_column("Detail", style="white")

    for result in results:
        table.add_row(
            SERVICE_TITLES.get(result.service, result.service),
            _STATUS_STYLES[result.status],
            escape(result.url or "-"),
            escape(result.detail or "-"),
        )
    console.print(table)


def has_failures(results: list[HealthCheckResult]) -> bool:
    """Return true when any enabled service failed its check."""
    return any(result.status.is_failure for result in results)
