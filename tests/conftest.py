"""Shared fixtures for the CLI tests."""

import pytest

from rice_cli.cli.configuration.models import RiceConfig, StateConfig, StorageConfig
from rice_cli.core.settings import CliSettings


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> CliSettings:
    """CLI settings with defaults, independent of the caller's environment."""
    for name in ("ENV_FILENAME", "MODULE_FILENAME", "HEALTH_PATH", "HEALTH_TIMEOUT", "CHECK_STRICT"):
        monkeypatch.delenv(f"RICE_CLI_{name}", raising=False)
    return CliSettings()


@pytest.fixture
def full_config() -> RiceConfig:
    """A configuration with both services enabled and every field set."""
    return RiceConfig(
        storage=StorageConfig(
            enabled=True,
            url="localhost:50051",
            token="storage-secret",
            user="admin",
            http_port=3000,
        ),
        state=StateConfig(
            enabled=True,
            url="https://state.example.com",
            token="state-secret",
            run_id="default",
        ),
    )
