"""Tests for the setup wizard flow."""

from pathlib import Path

import pytest

from rice_cli.cli.configuration.errors import InputValidationError, WizardAborted
from rice_cli.cli.configuration.models import RiceConfig, StateConfig, StorageConfig
from rice_cli.cli.configuration.store import load_existing_state
from rice_cli.cli.configuration.wizard import (
    QuestionKind,
    ScriptedInputProvider,
    SetupWizard,
    WizardStep,
    parse_port,
    parse_yes_no,
)
from rice_cli.cli.configuration.writer import write_configuration
from rice_cli.core.settings import CliSettings


def run_wizard(answers: list[str], seed: RiceConfig | None = None) -> tuple[RiceConfig, ScriptedInputProvider]:
    provider = ScriptedInputProvider(answers)
    wizard = SetupWizard(provider)
    result = wizard.run(seed or RiceConfig())
    assert wizard.step is WizardStep.DONE
    return result, provider


def test_disabling_storage_skips_its_questions() -> None:
    """A "no" answer jumps straight to the next service."""
    config, provider = run_wizard(["no", "yes", "https://state.example.com", "secret", ""])

    labels = [question.label for question in provider.questions]
    assert labels[0].startswith("Enable Rice Storage?")
    assert labels[1].startswith("Enable Rice State")
    assert len(labels) == 5
    assert config.storage == StorageConfig()
    assert config.state == StateConfig(
        enabled=True, url="https://state.example.com", token="secret", run_id="default"
    )


def test_disable_clears_seeded_fields(tmp_path: Path, settings: CliSettings) -> None:
    """Disabling a configured service discards its URL and token."""
    seed = RiceConfig(storage=StorageConfig(enabled=True, url="https://x", token="t"))

    config, _ = run_wizard(["n", "y", "https://state", "", ""], seed)
    write_configuration(config, tmp_path, settings)
    reloaded = load_existing_state(tmp_path, settings).config

    assert reloaded.storage.enabled is False
    assert reloaded.storage.url is None
    assert reloaded.storage.token is None


def test_enable_question_has_no_default_and_reprompts() -> None:
    """Blank or unclear answers to an enable question are asked again."""
    config, provider = run_wizard(["", "maybe", "no", "No"])

    assert provider.questions[0].kind is QuestionKind.CONFIRM
    assert provider.questions[0].default == ""
    assert provider.warnings == ["Please answer yes or no.", "Please answer yes or no."]
    assert not config.any_enabled()


def test_url_is_required_once_enabled() -> None:
    """A URL erased down to nothing is rejected."""
    config, provider = run_wizard(["yes", "   ", "not a url but accepted", "", "", "", "no"])

    assert provider.warnings == ["Value required."]
    assert config.storage.url == "not a url but accepted"
    assert config.storage.user == "admin"
    assert config.storage.http_port == 3000
    assert config.storage.token is None


def test_first_run_accepts_local_defaults() -> None:
    """Pressing Enter through a fresh setup targets a local Rice instance."""
    config, provider = run_wizard(["y", "", "", "", "", "y", "", "", ""])

    assert provider.warnings == []
    assert provider.questions[1].default == "localhost:50051"
    assert provider.questions[4].default == "3000"
    assert config.storage == StorageConfig(
        enabled=True, url="localhost:50051", user="admin", http_port=3000
    )
    assert config.state == StateConfig(enabled=True, url="localhost:50051", run_id="default")


def test_blank_answers_keep_existing_values(full_config: RiceConfig) -> None:
    """Every prompt defaults to the seeded value."""
    config, provider = run_wizard(["y", "", "", "", "", "y", "", "", ""], full_config)

    assert config == full_config
    url_question = provider.questions[1]
    assert url_question.default == "localhost:50051"


def test_secret_prompts_show_masked_value_only(full_config: RiceConfig) -> None:
    """Secret questions are never pre-filled and only show the masked token."""
    _, provider = run_wizard(["y", "", "new-token", "", "", "n"], full_config)

    token_question = provider.questions[2]
    assert token_question.kind is QuestionKind.SECRET
    assert token_question.default == ""
    assert "storage-secret" not in token_question.label
    assert "****cret" in token_question.label


def test_new_answers_replace_existing_values(full_config: RiceConfig) -> None:
    """Typed answers override the seed."""
    config, _ = run_wizard(
        ["y", "new-host:1", "new-token", "ops", "8080", "y", "https://other", "", "run-2"],
        full_config,
    )

    assert config.storage == StorageConfig(
        enabled=True, url="new-host:1", token="new-token", user="ops", http_port=8080
    )
    assert config.state == StateConfig(
        enabled=True, url="https://other", token="state-secret", run_id="run-2"
    )


def test_invalid_port_is_asked_again() -> None:
    """Ports outside the TCP range are rejected."""
    config, provider = run_wizard(["y", "host:50051", "", "", "http", "99999", "3000", "n"])

    assert len(provider.warnings) == 2
    assert config.storage.http_port == 3000


def test_running_out_of_answers_aborts() -> None:
    """A cancelled prompt stops the wizard."""
    with pytest.raises(WizardAborted):
        run_wizard(["yes"])


@pytest.mark.parametrize(("answer", "expected"), [("Y", True), ("yes", True), ("0", False), (" n ", False)])
def test_parse_yes_no(answer: str, expected: bool) -> None:
    """Common spellings of yes and no are accepted."""
    assert parse_yes_no(answer) is expected


def test_parse_port_rejects_non_numbers() -> None:
    """Only digits in range are ports."""
    assert parse_port("65535") == 65535
    with pytest.raises(InputValidationError):
        parse_port("0")
    with pytest.raises(InputValidationError):
        parse_port("-1")
