"""CLI configuration wizard package."""

from rice_cli.cli.configuration.errors import ConfigError, PersistenceError
from rice_cli.cli.configuration.masking import mask, render_report
from rice_cli.cli.configuration.models import RiceConfig, StateConfig, StorageConfig
from rice_cli.cli.configuration.store import load_existing_state
from rice_cli.cli.configuration.wizard import SetupWizard
from rice_cli.cli.configuration.writer import write_configuration

__all__ = [
    "ConfigError",
    "PersistenceError",
    "RiceConfig",
    "SetupWizard",
    "StateConfig",
    "StorageConfig",
    "load_existing_state",
    "mask",
    "render_report",
    "write_configuration",
]
