"""Config command: show the current Rice configuration."""

import click

from rice_cli.cli.commands.reporting import report_load_warnings
from rice_cli.cli.configuration.masking import render_report
from rice_cli.cli.configuration.store import load_existing_state
from rice_cli.cli.context import CliContext
from rice_cli.cli.ui import console


@click.command(name="config")
@click.pass_obj
def config(obj: CliContext) -> None:
    """Show current configuration."""
    state = load_existing_state(obj.root, obj.settings)
    report_load_warnings(state)
    console.print(render_report(state.config))

    module_name = obj.settings.module_filename
    if state.module_exists:
        console.print(f"\n{module_name} found.")
    else:
        console.print(f"\n{module_name} not found. Run `rice setup` to create it.")
