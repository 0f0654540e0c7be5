"""Runtime settings for the Rice CLI."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CliSettings(BaseSettings):
    """Tunable behaviour of the CLI itself, read from RICE_CLI_* variables."""

    model_config = SettingsConfigDict(env_prefix="RICE_CLI_", extra="ignore")

    env_filename: str = Field(default=".env", description="Environment file name")
    module_filename: str = Field(
        default="rice.config.js", description="Generated configuration module name"
    )
    health_path: str = Field(default="/health", description="Health endpoint path")
    health_timeout: float = Field(default=5.0, gt=0, description="Health probe timeout (seconds)")
    check_strict: bool = Field(
        default=True, description="Fail `rice check` when an enabled service is not reachable"
    )


def get_settings() -> CliSettings:
    """Load and return the CLI settings."""
    return CliSettings()


def env_path(root: Path, settings: CliSettings) -> Path:
    """Return the environment file path for a project.

    Args:
        root: Project working directory.
        settings: CLI settings.

    Returns:
        The environment file path.
    """
    return root / settings.env_filename


def module_path(root: Path, settings: CliSettings) -> Path:
    """Return the generated configuration module path for a project.

    Args:
        root: Project working directory.
        settings: CLI settings.

    Returns:
        The configuration module path.
    """
    return root / settings.module_filename
