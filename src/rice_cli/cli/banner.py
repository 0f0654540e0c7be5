"""CLI banner rendering."""

from importlib.metadata import PackageNotFoundError, version

from rich.panel import Panel
from rich.text import Text

from rice_cli.cli.ui import console


def print_setup_banner() -> None:
    """Print the setup welcome banner."""
    banner_text = Text()
    banner_text.append("Welcome to the Rice CLI Setup\n", style="bold green")
    banner_text.append(
        "This utility will walk you through setting up Rice in your project.\n",
        style="bright_white",
    )
    banner_text.append(f"v{get_version()}", style="dim white")
    console.print(Panel(banner_text, border_style="cyan", expand=True))


def get_version() -> str:
    """Return the CLI version.

    Returns:
        The CLI version string.
    """
    try:
        return version("rice-cli")
    except PackageNotFoundError:
        from rice_cli import __version__

        return __version__
