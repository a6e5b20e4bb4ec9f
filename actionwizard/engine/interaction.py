"""Interactor interface - every question to the user goes here."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

import click
import typer

from .errors import Aborted, InteractionUnavailable, InvalidAnswer
from .schema import Interaction, InteractionKind

TRUE_ANSWERS = ('y', 'yes', 'true', '1')
FALSE_ANSWERS = ('n', 'no', 'false', '0')


def validate_answer(interaction: Interaction, answer: Any) -> Any:
    """Check an answer against the interaction's constraints.

    Empty answers (None or blank strings) fall back to the interaction's
    default. Confirm answers are converted to bool.

    Args:
        interaction: The question that was asked
        answer: Raw answer from the user or a script

    Returns:
        The value to store in the variable context

    Raises:
        InvalidAnswer: Answer is not acceptable for this interaction
    """
    if answer is None or (isinstance(answer, str) and not answer.strip()):
        if interaction.default is not None:
            answer = interaction.default
        elif interaction.kind == InteractionKind.CONFIRM:
            return False
        elif interaction.kind == InteractionKind.SELECT:
            raise InvalidAnswer(f"choose one of: {', '.join(interaction.options)}")
        else:
            return answer or ''

    if interaction.kind == InteractionKind.CONFIRM:
        if isinstance(answer, bool):
            return answer
        text = str(answer).strip().lower()
        if text in TRUE_ANSWERS:
            return True
        if text in FALSE_ANSWERS:
            return False
        raise InvalidAnswer(f"expected yes or no, got {answer!r}")

    if interaction.kind == InteractionKind.SELECT:
        text = str(answer).strip()
        if text not in interaction.options:
            raise InvalidAnswer(f"{text!r} is not one of: {', '.join(interaction.options)}")
        return text

    return str(answer)


class Interactor(ABC):
    """Interface for asking the user questions."""

    @abstractmethod
    def ask(self, interaction: Interaction) -> Any:
        """Ask a question and return the validated answer.

        Args:
            interaction: Question to ask, prompt already interpolated

        Returns:
            str for input/select/editor, bool for confirm

        Raises:
            Aborted: User cancelled
            InteractionUnavailable: No way to reach the user
        """
        pass


class ConsoleInteractor(Interactor):
    """Real implementation - reads answers from stdin."""

    def ask(self, interaction: Interaction) -> Any:
        if interaction.kind == InteractionKind.EDITOR:
            return self._edit(interaction)

        if interaction.kind == InteractionKind.SELECT:
            print()  # Blank line before options
            for i, option in enumerate(interaction.options, 1):
                print(f"  {i}. {option}")
            print()  # Blank line after options

        while True:
            response = self._read(self._format_prompt(interaction))

            if interaction.kind == InteractionKind.SELECT and response.isdigit():
                # Accept the option number as well as its text
                index = int(response)
                if 1 <= index <= len(interaction.options):
                    response = interaction.options[index - 1]

            try:
                return validate_answer(interaction, response)
            except InvalidAnswer as e:
                # Show error and re-prompt
                print(f"Error: {e}")

    def _format_prompt(self, interaction: Interaction) -> str:
        default = interaction.default
        if interaction.kind == InteractionKind.CONFIRM:
            # Special formatting for boolean defaults
            return f"{interaction.prompt} [{'Y/n' if default else 'y/N'}]: "
        if default is not None:
            return f"{interaction.prompt} [{default}]: "
        return f"{interaction.prompt}: "

    def _read(self, prompt: str) -> str:
        try:
            response = input(prompt).strip()
        except (EOFError, KeyboardInterrupt) as e:
            raise Aborted("input cancelled") from e
        except (OSError, RuntimeError, ValueError) as e:
            # stdin closed, detached or unreadable
            raise InteractionUnavailable(f"cannot read from stdin: {e}") from e
        print()  # Add newline after user input
        return response

    def _edit(self, interaction: Interaction) -> str:
        print(interaction.prompt)
        initial = '' if interaction.default is None else str(interaction.default)
        try:
            text = typer.edit(text=initial, require_save=True)
        except click.ClickException as e:
            raise InteractionUnavailable(f"cannot launch editor: {e.format_message()}") from e
        # None means the editor was closed without saving; falls back to the default
        return validate_answer(interaction, text)


class MockInteractor(Interactor):
    """Mock for testing - answers from a script and records calls."""

    #: Put in the answer queue to simulate the user cancelling.
    ABORT = object()

    def __init__(self, answers: Optional[Iterable[Any]] = None):
        self.calls: List[tuple] = []
        self.answer_queue: List[Any] = list(answers or [])  # Pre-scripted user answers

    def ask(self, interaction: Interaction) -> Any:
        self.calls.append(('ask', interaction.kind.value, interaction.prompt, interaction.out))

        if not self.answer_queue:
            # Fall back to default, like pressing Enter
            if interaction.default is not None:
                return validate_answer(interaction, None)
            raise InteractionUnavailable(f"no scripted answer for {interaction.prompt!r}")

        answer = self.answer_queue.pop(0)
        if answer is self.ABORT:
            raise Aborted(f"cancelled at {interaction.prompt!r}")
        return validate_answer(interaction, answer)
