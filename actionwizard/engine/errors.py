"""Error taxonomy for action runs.

Fatal errors end a run; the runner attaches them to the returned RunResult
instead of raising. ``RunResult.raise_for_status()`` re-raises them with the
partial result available on ``error.result``.
"""

from typing import Any, Optional


class ActionWizardError(Exception):
    """Base class for all engine errors."""

    #: Partial RunResult, set when the error is surfaced by raise_for_status().
    result: Optional[Any] = None


class Aborted(ActionWizardError):
    """The user cancelled an interaction."""


class Halted(ActionWizardError):
    """The observer asked the runner to stop."""

    def __init__(self, action_name: str):
        super().__init__(f"run halted by observer at action '{action_name}'")
        self.action_name = action_name


class InteractionUnavailable(ActionWizardError):
    """The host's interaction channel could not be used."""


class InvalidAnswer(ActionWizardError, ValueError):
    """An answer does not satisfy the interaction's constraints."""


class TemplateError(ActionWizardError):
    """A command template could not be resolved."""


class UnresolvedVariable(TemplateError):
    """A placeholder references a variable missing from the context."""

    def __init__(self, name: str):
        super().__init__(f"unresolved variable '{name}'")
        self.name = name


class TemplateSyntaxError(TemplateError):
    """A template contains a stray brace or a malformed placeholder."""

    def __init__(self, template: str, position: int, reason: str):
        super().__init__(f"{reason} at position {position} in template {template!r}")
        self.template = template
        self.position = position


class SpawnFailed(ActionWizardError):
    """A command could not be launched."""

    def __init__(self, command: str, reason: str):
        super().__init__(f"failed to launch '{command}': {reason}")
        self.command = command
        self.reason = reason


class NonZeroExit(ActionWizardError):
    """A command ran but exited with a non-zero status.

    Recorded on the action outcome; only fatal under ``halt_on_error``.
    """

    def __init__(self, command: str, status: int):
        super().__init__(f"command '{command}' returned exit code {status}")
        self.command = command
        self.status = status


class GuardEvaluationError(ActionWizardError):
    """A guard expression is malformed."""

    def __init__(self, expression: str, reason: str):
        super().__init__(f"invalid guard {expression!r}: {reason}")
        self.expression = expression


class WorkflowError(ActionWizardError):
    """A workflow document could not be loaded or validated."""
