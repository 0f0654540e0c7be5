"""Errors raised while reading, prompting for, and writing configuration."""

from pathlib import Path


class ConfigError(RuntimeError):
    """Configuration related errors."""


class InputValidationError(ConfigError):
    """An answer was rejected and the question should be asked again."""


class ParseError(ConfigError):
    """An existing configuration file could not be understood."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path.name}: {reason}")
        self.path = path
        self.reason = reason


class PersistenceError(ConfigError):
    """A configuration file could not be read for merging or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
        self.reason = reason


class WizardAborted(ConfigError):
    """The operator cancelled the setup wizard."""
