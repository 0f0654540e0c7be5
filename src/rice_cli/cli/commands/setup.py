"""Setup command: configure Rice in a project."""

import sys

import click

from rice_cli.cli.banner import print_setup_banner
from rice_cli.cli.commands.reporting import (
    has_failures,
    print_health_results,
    report_load_warnings,
)
from rice_cli.cli.configuration.errors import PersistenceError, WizardAborted
from rice_cli.cli.configuration.options import SDK_PACKAGE
from rice_cli.cli.configuration.store import load_existing_state
from rice_cli.cli.configuration.wizard import (
    InputProvider,
    QuestionaryInputProvider,
    SetupWizard,
)
from rice_cli.cli.configuration.writer import WriteReport, write_configuration
from rice_cli.cli.context import CliContext
from rice_cli.cli.ui import console
from rice_cli.core.health import run_health_checks

CHECK = "✔"


def build_input_provider() -> InputProvider:
    """Return the provider used to answer wizard questions."""
    return QuestionaryInputProvider()


@click.command()
@click.pass_obj
def setup(obj: CliContext) -> None:
    """Setup Rice in the current project (default)."""
    print_setup_banner()
    state = load_existing_state(obj.root, obj.settings)
    report_load_warnings(state)

    try:
        config = SetupWizard(build_input_provider()).run(state.config)
    except WizardAborted as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    if not config.any_enabled():
        console.print("[red]You must enable at least one service.[/red]")
        return

    console.print("\n[bold]Generating configuration files...[/bold]")
    try:
        report = write_configuration(config, obj.root, obj.settings)
    except PersistenceError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    _print_write_report(report)

    console.print()
    with console.status("[cyan]Verifying connection to Rice...[/cyan]"):
        results = run_health_checks(config, obj.settings)
    print_health_results(results)
    if has_failures(results):
        console.print(
            "[yellow]Connection check failed. Your configuration was saved; "
            "make sure your Rice instance is running and run `rice check` again.[/yellow]"
        )

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print(f"You can now install the SDK using: npm install {SDK_PACKAGE}")


def _print_write_report(report: WriteReport) -> None:
    """Print which files were created or updated."""
    env_action = "Created" if report.env_created else "Updated"
    module_action = "Created" if report.module_created else "Regenerated"
    console.print(f"[green]{CHECK}[/green] {env_action} {report.env_path.name}")
    console.print(f"[green]{CHECK}[/green] {module_action} {report.module_path.name}")
