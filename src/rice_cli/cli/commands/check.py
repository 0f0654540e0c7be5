"""Check command: verify the configured Rice services are reachable."""

import sys

import click

from rice_cli.cli.commands.reporting import (
    has_failures,
    print_health_results,
    report_load_warnings,
)
from rice_cli.cli.configuration.store import load_existing_state
from rice_cli.cli.context import CliContext
from rice_cli.cli.ui import console
from rice_cli.core.health import run_health_checks


@click.command()
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Exit with an error when a service is unreachable. Defaults to RICE_CLI_CHECK_STRICT.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for each health probe.",
)
@click.pass_obj
def check(obj: CliContext, strict: bool | None, timeout: float | None) -> None:
    """Check connection to the Rice services.

    Each enabled service is probed once at its health endpoint.
    """
    settings = obj.settings
    if timeout is not None:
        settings = settings.model_copy(update={"health_timeout": timeout})
    if strict is None:
        strict = settings.check_strict

    state = load_existing_state(obj.root, settings)
    report_load_warnings(state)
    if not state.config.any_enabled():
        console.print("[yellow]No Rice services are configured. Run `rice setup` first.[/yellow]")
        return

    with console.status("[cyan]Checking connection to Rice...[/cyan]"):
        results = run_health_checks(state.config, settings)
    print_health_results(results)

    if has_failures(results):
        console.print("[red]Some services could not be verified.[/red]")
        if strict:
            sys.exit(1)
        return
    console.print("[green]All enabled services are healthy.[/green]")
