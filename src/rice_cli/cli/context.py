"""Objects passed between the CLI group and its commands."""

from dataclasses import dataclass
from pathlib import Path

from rice_cli.core.settings import CliSettings


@dataclass
class CliContext:
    """Values shared by every subcommand."""

    root: Path
    settings: CliSettings
