"""Tests for the generated configuration module."""

from pathlib import Path

import pytest

from rice_cli.cli.configuration.errors import ParseError
from rice_cli.cli.configuration.models import RiceConfig, StateConfig
from rice_cli.cli.configuration.module import parse_module_text, render_module

MODULE_PATH = Path("rice.config.js")


def test_render_references_environment_for_every_field(full_config: RiceConfig) -> None:
    """Values come from env keys, with literal fallbacks only for non-secrets."""
    source = render_module(full_config)

    assert "module.exports = {" in source
    assert 'url: process.env.RICE_STORAGE_URL || "localhost:50051",' in source
    assert "token: process.env.RICE_STORAGE_TOKEN," in source
    assert 'httpPort: process.env.RICE_STORAGE_HTTP_PORT || "3000",' in source
    assert 'runId: process.env.RICE_STATE_RUN_ID || "default",' in source
    assert "storage-secret" not in source
    assert "state-secret" not in source


def test_render_disabled_service_has_only_enabled_flag() -> None:
    """Disabled services carry nothing but their flag."""
    config = RiceConfig(state=StateConfig(enabled=True, url="https://state.example.com"))
    source = render_module(config)

    assert "  storage: {\n    enabled: false,\n  }," in source
    assert "RICE_STORAGE" not in source


def test_parse_reads_flags_and_fallbacks(full_config: RiceConfig) -> None:
    """Parsing the rendered module recovers non-secret values."""
    parsed = parse_module_text(render_module(full_config), MODULE_PATH)

    assert parsed["storage"] == {
        "enabled": True,
        "url": "localhost:50051",
        "user": "admin",
        "http_port": "3000",
    }
    assert parsed["state"] == {
        "enabled": True,
        "url": "https://state.example.com",
        "run_id": "default",
    }


def test_parse_handles_quotes_and_commas_in_values() -> None:
    """String fallbacks are decoded as JSON literals."""
    config = RiceConfig(state=StateConfig(enabled=True, url='https://h/a,b"c', run_id="x"))

    parsed = parse_module_text(render_module(config), MODULE_PATH)

    assert parsed["state"]["url"] == 'https://h/a,b"c'


@pytest.mark.parametrize(
    ("source", "reason"),
    [
        ("export default {}", "module.exports"),
        ("module.exports = {\n  storage: {\n    enabled: true,\n  },\n};", "`state`"),
        (
            "module.exports = {\n  storage: {\n    enabled: maybe,\n  },\n"
            "  state: {\n    enabled: false,\n  },\n};",
            "unsupported value",
        ),
        (
            'module.exports = {\n  storage: {\n    enabled: "yes",\n  },\n'
            "  state: {\n    enabled: false,\n  },\n};",
            "true or false",
        ),
    ],
)
def test_parse_rejects_unexpected_shapes(source: str, reason: str) -> None:
    """Anything other than the generated shape is reported as malformed."""
    with pytest.raises(ParseError) as excinfo:
        parse_module_text(source, MODULE_PATH)

    assert reason in excinfo.value.reason
