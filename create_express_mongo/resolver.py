"""Turns the CLI argument and interactive answers into a ``ProjectConfig``.

Questions are asked through a prompter object so the resolver can run
without a terminal.  The frontend question only exists on the full-stack
branch; a backend-only run never sees it.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

from rich.console import Console
from rich.prompt import InvalidResponse, Prompt

from .config import FrontendFramework, LanguageVariant, ProjectConfig, ProjectMode
from .errors import InvalidChoiceError

E = TypeVar("E", ProjectMode, LanguageVariant, FrontendFramework)


class Prompter(Protocol):
    def ask_text(self, message: str) -> str: ...

    def ask_choice(self, message: str, choices: list[str], default: str) -> str: ...


class ProjectNamePrompt(Prompt):
    """Text prompt that re-asks until a non-blank answer is given."""

    validate_error_message = "[prompt.invalid]Please enter a valid project name."

    def process_response(self, value: str) -> str:
        value = super().process_response(value).strip()
        if not value:
            raise InvalidResponse(self.validate_error_message)
        return value


class RichPrompter:
    """Interactive prompter backed by ``rich.prompt``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console

    def ask_text(self, message: str) -> str:
        return ProjectNamePrompt.ask(message, console=self.console)

    def ask_choice(self, message: str, choices: list[str], default: str) -> str:
        return Prompt.ask(message, choices=choices, default=default, console=self.console)


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------

NAME_QUESTION = "What is your project name?"
MODE_QUESTION = "Choose project type"
LANGUAGE_QUESTION = "Choose your backend language"
FRONTEND_QUESTION = "Choose your frontend framework"


def _choose(prompter: Prompter, message: str, enum_type: type[E], default: E) -> E:
    choices = [member.value for member in enum_type]
    answer = prompter.ask_choice(message, choices, default.value)
    try:
        return enum_type(answer)
    except ValueError:
        raise InvalidChoiceError(message, answer, choices) from None


def resolve(cli_argument: str | None, prompter: Prompter) -> ProjectConfig:
    """Collect the remaining answers and build the project configuration.

    Args:
        cli_argument: Positional project name, or ``None`` when omitted.  A
            blank value is treated as omitted.
        prompter: Source of interactive answers.

    Raises:
        InvalidChoiceError: If the prompter returns a value outside a choice set.
    """
    name = (cli_argument or "").strip()
    if not name:
        name = prompter.ask_text(NAME_QUESTION).strip()

    mode = _choose(prompter, MODE_QUESTION, ProjectMode, ProjectMode.BACKEND_ONLY)
    language = _choose(prompter, LANGUAGE_QUESTION, LanguageVariant, LanguageVariant.JAVASCRIPT)

    frontend: FrontendFramework | None = None
    if mode is ProjectMode.FULL_STACK:
        frontend = _choose(prompter, FRONTEND_QUESTION, FrontendFramework, FrontendFramework.REACT)

    return ProjectConfig(name=name, mode=mode, language=language, frontend=frontend)
