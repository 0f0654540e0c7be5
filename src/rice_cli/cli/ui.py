"""Shared Rich console for the CLI."""

import questionary
import questionary.constants as questionary_constants
import questionary.styles as questionary_styles
from rich.console import Console

console = Console()

QUESTIONARY_STYLE = questionary.Style(
    [
        ("qmark", "fg:#5f819d"),
        ("question", "fg:#e0e0e0 bold"),
        ("answer", "fg:#2fbf71 bold"),
        ("instruction", "fg:#e0e0e0"),
        ("text", "fg:#e0e0e0"),
    ]
)


def apply_questionary_style() -> None:
    """Use the CLI palette as the default Questionary style for all prompts."""
    questionary_constants.DEFAULT_STYLE = QUESTIONARY_STYLE
    setattr(questionary_styles, "DEFAULT_STYLE", QUESTIONARY_STYLE)
