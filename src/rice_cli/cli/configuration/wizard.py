"""Setup wizard for the Rice services.

The wizard is a fixed, single-pass sequence of steps. Questions go through an
`InputProvider`, so the same flow runs against the terminal or a scripted list
of answers.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol

import questionary

from rice_cli.cli.configuration.errors import InputValidationError, WizardAborted
from rice_cli.cli.configuration.masking import secret_hint
from rice_cli.cli.configuration.models import RiceConfig, ServiceConfig
from rice_cli.cli.configuration.options import (
    DEFAULT_SERVICE_URL,
    DEFAULT_STATE_RUN_ID,
    DEFAULT_STORAGE_HTTP_PORT,
    DEFAULT_STORAGE_USER,
    SERVICE_STATE,
    SERVICE_STORAGE,
)
from rice_cli.cli.ui import console

logger = logging.getLogger(__name__)

_YES_ANSWERS = frozenset({"y", "yes", "true", "1"})
_NO_ANSWERS = frozenset({"n", "no", "false", "0"})


class QuestionKind(Enum):
    CONFIRM = auto()
    TEXT = auto()
    SECRET = auto()


@dataclass(frozen=True)
class Question:
    """A single question asked by the wizard."""

    label: str
    kind: QuestionKind = QuestionKind.TEXT
    default: str = ""


class InputProvider(Protocol):
    """Source of answers for the wizard."""

    def ask(self, question: Question) -> str | None:
        """Return the raw answer, or None when the operator cancels."""

    def warn(self, message: str) -> None:
        """Show a validation message before the question is repeated."""


class QuestionaryInputProvider:
    """Ask questions on the terminal."""

    def ask(self, question: Question) -> str | None:
        if question.kind is QuestionKind.SECRET:
            return questionary.password(question.label).ask()
        if question.kind is QuestionKind.CONFIRM:
            return questionary.text(f"{question.label} (y/n)").ask()
        return questionary.text(question.label, default=question.default).ask()

    def warn(self, message: str) -> None:
        console.print(f"[yellow]{message}[/yellow]")


@dataclass
class ScriptedInputProvider:
    """Answer questions from a pre-recorded list.

    Every question and warning is recorded. Running out of answers behaves
    like a cancelled prompt.
    """

    answers: Iterable[str]
    questions: list[Question] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._answers = iter(self.answers)

    def ask(self, question: Question) -> str | None:
        self.questions.append(question)
        answer = next(self._answers, None)
        if answer is None:
            return None
        # A text prompt pre-filled with a default returns it when accepted.
        if not answer and question.kind is QuestionKind.TEXT:
            return question.default
        return answer

    def warn(self, message: str) -> None:
        self.warnings.append(message)


class WizardStep(Enum):
    STORAGE_ENABLED = auto()
    STORAGE_URL = auto()
    STORAGE_TOKEN = auto()
    STORAGE_USER = auto()
    STORAGE_HTTP_PORT = auto()
    STATE_ENABLED = auto()
    STATE_URL = auto()
    STATE_TOKEN = auto()
    STATE_RUN_ID = auto()
    DONE = auto()


@dataclass(frozen=True)
class _StepDefinition:
    """What a step asks and where its answer goes."""

    service: str
    field: str
    label: str
    kind: QuestionKind = QuestionKind.TEXT
    required: bool = False
    fallback: str | None = None


_STEPS = {
    WizardStep.STORAGE_ENABLED: _StepDefinition(
        SERVICE_STORAGE, "enabled", "Enable Rice Storage?", QuestionKind.CONFIRM
    ),
    WizardStep.STORAGE_URL: _StepDefinition(
        SERVICE_STORAGE,
        "url",
        "Storage instance URL:",
        required=True,
        fallback=DEFAULT_SERVICE_URL,
    ),
    WizardStep.STORAGE_TOKEN: _StepDefinition(
        SERVICE_STORAGE, "token", "Storage auth token/password", QuestionKind.SECRET
    ),
    WizardStep.STORAGE_USER: _StepDefinition(
        SERVICE_STORAGE, "user", "Storage user:", fallback=DEFAULT_STORAGE_USER
    ),
    WizardStep.STORAGE_HTTP_PORT: _StepDefinition(
        SERVICE_STORAGE,
        "http_port",
        "Storage HTTP port for verification:",
        fallback=DEFAULT_STORAGE_HTTP_PORT,
    ),
    WizardStep.STATE_ENABLED: _StepDefinition(
        SERVICE_STATE, "enabled", "Enable Rice State (AI agent memory)?", QuestionKind.CONFIRM
    ),
    WizardStep.STATE_URL: _StepDefinition(
        SERVICE_STATE,
        "url",
        "State instance URL:",
        required=True,
        fallback=DEFAULT_SERVICE_URL,
    ),
    WizardStep.STATE_TOKEN: _StepDefinition(
        SERVICE_STATE, "token", "State auth token", QuestionKind.SECRET
    ),
    WizardStep.STATE_RUN_ID: _StepDefinition(
        SERVICE_STATE, "run_id", "State run ID:", fallback=DEFAULT_STATE_RUN_ID
    ),
}

# Next step after each step; enable steps jump to the skip target on "no".
_NEXT_STEP = {
    WizardStep.STORAGE_ENABLED: WizardStep.STORAGE_URL,
    WizardStep.STORAGE_URL: WizardStep.STORAGE_TOKEN,
    WizardStep.STORAGE_TOKEN: WizardStep.STORAGE_USER,
    WizardStep.STORAGE_USER: WizardStep.STORAGE_HTTP_PORT,
    WizardStep.STORAGE_HTTP_PORT: WizardStep.STATE_ENABLED,
    WizardStep.STATE_ENABLED: WizardStep.STATE_URL,
    WizardStep.STATE_URL: WizardStep.STATE_TOKEN,
    WizardStep.STATE_TOKEN: WizardStep.STATE_RUN_ID,
    WizardStep.STATE_RUN_ID: WizardStep.DONE,
}

_SKIP_STEP = {
    WizardStep.STORAGE_ENABLED: WizardStep.STATE_ENABLED,
    WizardStep.STATE_ENABLED: WizardStep.DONE,
}


class SetupWizard:
    """Collect service settings, seeded with the existing configuration."""

    def __init__(self, provider: InputProvider) -> None:
        self.provider = provider
        self.step = WizardStep.STORAGE_ENABLED

    def run(self, seed: RiceConfig) -> RiceConfig:
        """Run every step and return the resulting configuration.

        Args:
            seed: Configuration used for defaults.

        Returns:
            The new configuration.

        Raises:
            WizardAborted: If the operator cancels a prompt.
        """
        answers: dict[str, dict[str, Any]] = {
            SERVICE_STORAGE: {"enabled": False},
            SERVICE_STATE: {"enabled": False},
        }
        self.step = WizardStep.STORAGE_ENABLED
        while self.step is not WizardStep.DONE:
            definition = _STEPS[self.step]
            current = seed.service(definition.service)
            value = self._ask_until_valid(definition, current)
            answers[definition.service][definition.field] = value
            logger.debug("Wizard step %s answered", self.step.name)
            if definition.field == "enabled" and not value:
                self.step = _SKIP_STEP[self.step]
            else:
                self.step = _NEXT_STEP[self.step]
        return RiceConfig.model_validate(answers)

    def _ask_until_valid(self, definition: _StepDefinition, current: ServiceConfig) -> Any:
        """Ask a step's question until the answer is accepted."""
        question = _build_question(definition, current)
        while True:
            answer = self.provider.ask(question)
            if answer is None:
                raise WizardAborted("Setup cancelled.")
            try:
                return _interpret_answer(definition, answer, current)
            except InputValidationError as exc:
                self.provider.warn(str(exc))


def _build_question(definition: _StepDefinition, current: ServiceConfig) -> Question:
    """Build the question for a step, pre-filled from the current value."""
    if definition.kind is QuestionKind.CONFIRM:
        state = "enabled" if current.enabled else "disabled"
        return Question(f"{definition.label} [currently {state}]", QuestionKind.CONFIRM)
    if definition.kind is QuestionKind.SECRET:
        return Question(f"{definition.label} ({secret_hint(current.token)}):", QuestionKind.SECRET)
    existing = getattr(current, definition.field)
    default = str(existing) if existing is not None else (definition.fallback or "")
    return Question(definition.label, QuestionKind.TEXT, default)


def _interpret_answer(definition: _StepDefinition, answer: str, current: ServiceConfig) -> Any:
    """Turn a raw answer into a field value.

    Raises:
        InputValidationError: If the answer is not acceptable.
    """
    text = answer.strip()
    if definition.kind is QuestionKind.CONFIRM:
        return parse_yes_no(text)

    existing = getattr(current, definition.field)
    if not text:
        if existing is not None:
            return existing
        if definition.required:
            raise InputValidationError("Value required.")
        return definition.fallback

    if definition.field == "http_port":
        return parse_port(text)
    return text


def parse_yes_no(text: str) -> bool:
    """Parse a yes/no answer.

    Raises:
        InputValidationError: If the answer is blank or not yes/no.
    """
    normalised = text.strip().lower()
    if normalised in _YES_ANSWERS:
        return True
    if normalised in _NO_ANSWERS:
        return False
    raise InputValidationError("Please answer yes or no.")


def parse_port(text: str) -> int:
    """Parse a TCP port number.

    Raises:
        InputValidationError: If the text is not a port in 1-65535.
    """
    if not text.isdigit() or not 1 <= int(text) <= 65535:  # noqa: PLR2004
        raise InputValidationError("Port must be a number between 1 and 65535.")
    return int(text)
