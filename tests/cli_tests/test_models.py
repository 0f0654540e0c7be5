"""Tests for the configuration models."""

import pytest
from pydantic import SecretStr, ValidationError

from rice_cli.cli.configuration.models import RiceConfig, StateConfig, StorageConfig


def test_enabled_service_requires_url() -> None:
    """An enabled service without a URL is rejected."""
    with pytest.raises(ValidationError):
        StorageConfig(enabled=True)
    with pytest.raises(ValidationError):
        StateConfig(enabled=True, url="   ")


def test_disabled_service_discards_fields() -> None:
    """Disabling a service clears every stored field."""
    storage = StorageConfig(enabled=False, url="https://x", token="t", user="admin", http_port=3000)

    assert storage.url is None
    assert storage.token is None
    assert storage.user is None
    assert storage.http_port is None


def test_empty_token_is_not_set() -> None:
    """An empty token means no token."""
    state = StateConfig(enabled=True, url="https://state", token="")

    assert state.token is None
    assert state.token_value() is None


def test_token_is_hidden_in_repr() -> None:
    """Tokens never show up in model representations."""
    state = StateConfig(enabled=True, url="https://state", token="secret-value")

    assert "secret-value" not in repr(state)
    assert "secret-value" not in str(RiceConfig(state=state))
    assert state.token_value() == "secret-value"


def test_models_compare_by_secret_value() -> None:
    """Equal settings compare equal, including tokens."""
    first = StateConfig(enabled=True, url="https://state", token="abc")
    second = StateConfig(enabled=True, url="https://state", token=SecretStr("abc"))

    assert first == second
    assert first != StateConfig(enabled=True, url="https://state", token="abd")


def test_http_port_is_validated() -> None:
    """Ports must be in the TCP range."""
    assert StorageConfig(enabled=True, url="h", http_port="3000").http_port == 3000
    with pytest.raises(ValidationError):
        StorageConfig(enabled=True, url="h", http_port=70000)


def test_default_config_has_everything_disabled() -> None:
    """A fresh configuration enables nothing."""
    config = RiceConfig()

    assert not config.any_enabled()
    assert config.service("storage") is config.storage
