"""CLI entrypoint for Rice setup."""

import logging
from pathlib import Path

import click

from rice_cli.cli.banner import get_version
from rice_cli.cli.commands.check import check
from rice_cli.cli.commands.config import config
from rice_cli.cli.commands.setup import setup
from rice_cli.cli.context import CliContext
from rice_cli.cli.ui import apply_questionary_style
from rice_cli.core.settings import get_settings


@click.group(invoke_without_command=True)
@click.option(
    "--dir",
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project directory to configure.",
)
@click.option("--verbose", is_flag=True, help="Show debug logging.")
@click.version_option(version=get_version(), prog_name="rice")
@click.pass_context
def cli(ctx: click.Context, root: Path, verbose: bool) -> None:
    """Rice CLI Setup Tool.

    Runs the setup wizard when no command is given.

    Args:
        ctx: Click context for the command invocation.
        root: Project directory to configure.
        verbose: Whether to log at debug level.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    apply_questionary_style()
    ctx.obj = CliContext(root=root, settings=get_settings())
    if ctx.invoked_subcommand is None:
        ctx.invoke(setup)


cli.add_command(setup)
cli.add_command(config)
cli.add_command(check)


def main() -> None:
    """Run the CLI."""
    cli()
