"""ActionRunner - executes action lists with injected interactor and executor."""

import os
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .context import VariableContext
from .errors import ActionWizardError, Aborted, Halted, NonZeroExit, SpawnFailed
from .executor import ExecutionOutcome, Executor
from .guard import evaluate_guard
from .interaction import Interactor
from .schema import Action, Command, InteractionKind, RunPolicy
from .template import interpolate


class ActionHook(Flag):
    """Observation points around an action. Also used to select hooks."""

    BEFORE = 1
    AFTER = 2
    BOTH = BEFORE | AFTER


class Control(Enum):
    """Observer return value. Returning None means CONTINUE."""

    CONTINUE = "continue"
    HALT = "halt"


class ActionState(str, Enum):
    DONE = "done"
    SKIPPED = "skipped"
    ABORTED = "aborted"


class RunStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class ActionOutcome:
    """What happened to one action."""

    name: str
    state: ActionState
    response: Any = None
    execution: Optional[ExecutionOutcome] = None
    error: Optional[ActionWizardError] = None
    declined: bool = False

    @property
    def skipped(self) -> bool:
        return self.state == ActionState.SKIPPED

    @property
    def ok(self) -> bool:
        """True if the action finished without any recorded error."""
        return self.state != ActionState.ABORTED and self.error is None


@dataclass(frozen=True)
class HookEvent:
    """Passed to the observer at every selected hook point."""

    hook: ActionHook
    action: Action
    index: int
    skipped: bool = False
    outcome: Optional[ActionOutcome] = None  # Only set for AFTER


Observer = Callable[[HookEvent], Optional[Control]]


@dataclass
class RunResult:
    """
    Everything a run produced, also when it was aborted.

    ``outcomes`` holds one entry per processed action in list order. An
    aborted run ends with the outcome of the action that failed.
    """

    status: RunStatus
    outcomes: List[ActionOutcome] = field(default_factory=list)
    context: VariableContext = field(default_factory=VariableContext)
    error: Optional[ActionWizardError] = None

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.COMPLETED

    @property
    def failed(self) -> List[ActionOutcome]:
        """Outcomes that recorded a non-fatal error such as NonZeroExit."""
        return [o for o in self.outcomes if o.error is not None]

    def raise_for_status(self) -> 'RunResult':
        """Raise the fatal error of an aborted run, with this result attached."""
        if self.error is not None and self.status == RunStatus.ABORTED:
            self.error.result = self
            raise self.error
        return self


class ActionRunner:
    """
    Runs actions strictly in order.

    Key responsibilities:
    - Evaluate guards against the variable context
    - Ask interactions and capture answers
    - Resolve command templates and execute them
    - Report every action to the observer

    All side effects go through the injected interactor and executor.
    """

    def __init__(self, interactor: Interactor, executor: Executor, policy: Optional[RunPolicy] = None):
        """
        Initialize the runner.

        Args:
            interactor: Interactor implementation for questions
            executor: Executor implementation for commands
            policy: Halting and working-directory policy (default: RunPolicy())
        """
        self.interactor = interactor
        self.executor = executor
        self.policy = policy or RunPolicy()

    def run(
        self,
        actions: Sequence[Action],
        initial_context: Optional[Mapping[str, Any]] = None,
        hooks: ActionHook = ActionHook.BOTH,
        observer: Optional[Observer] = None,
    ) -> RunResult:
        """
        Run all actions.

        Args:
            actions: Actions in execution order
            initial_context: Variables available before the first action (copied)
            hooks: Hook points the observer wants to see
            observer: Optional callback, may return Control.HALT to stop the run

        Returns:
            RunResult with per-action outcomes and the final context.
            Fatal errors are reported on RunResult.error, never raised.
        """
        context = VariableContext(initial_context)
        outcomes: List[ActionOutcome] = []

        for index, action in enumerate(actions):
            try:
                outcome = self._run_action(index, action, context, hooks, observer)
            except ActionWizardError as e:
                outcomes.append(ActionOutcome(name=action.name, state=ActionState.ABORTED, error=e))
                return RunResult(RunStatus.ABORTED, outcomes, context, e)

            outcomes.append(outcome)

            event = HookEvent(ActionHook.AFTER, action, index, outcome.skipped, outcome)
            if self._fire(event, hooks, observer) == Control.HALT:
                return RunResult(RunStatus.ABORTED, outcomes, context, Halted(action.name))

            if self._is_fatal(action, outcome):
                return RunResult(RunStatus.ABORTED, outcomes, context, outcome.error)

        return RunResult(RunStatus.COMPLETED, outcomes, context)

    def _run_action(
        self,
        index: int,
        action: Action,
        context: VariableContext,
        hooks: ActionHook,
        observer: Optional[Observer],
    ) -> ActionOutcome:
        """
        Execute a single action up to (not including) its AFTER hook.

        Raises:
            ActionWizardError: Any fatal condition for the run
        """
        run_it = evaluate_guard(action.when, context)

        event = HookEvent(ActionHook.BEFORE, action, index, skipped=not run_it)
        if self._fire(event, hooks, observer) == Control.HALT:
            raise Halted(action.name)

        if not run_it:
            return ActionOutcome(name=action.name, state=ActionState.SKIPPED)

        outcome = ActionOutcome(name=action.name, state=ActionState.DONE)

        if action.interaction:
            interaction = action.interaction.model_copy(
                update={'prompt': interpolate(action.interaction.prompt, context)}
            )
            outcome.response = self.interactor.ask(interaction)

            if interaction.out:
                context.set(interaction.out, outcome.response)

            if interaction.kind == InteractionKind.CONFIRM and outcome.response is False:
                outcome.declined = True
                if action.abort_on_decline:
                    raise Aborted(f"'{action.name}' was declined")
                # A declined confirmation gates the action's command
                return outcome

        if action.command:
            command_line = context.render(action.command.run)
            cwd = self._resolve_cwd(action.command, context)
            try:
                outcome.execution = self.executor.execute(command_line, cwd=cwd, capture=action.command.capture)
            except SpawnFailed as e:
                if self.policy.spawn_failure_fatal:
                    raise
                outcome.error = e
                return outcome

            if not outcome.execution.ok:
                outcome.error = NonZeroExit(command_line, outcome.execution.exit_code)

        return outcome

    def _resolve_cwd(self, command: Command, context: VariableContext) -> Optional[str]:
        base = self.policy.working_dir
        if not command.cwd:
            return base

        cwd = context.render(command.cwd)
        if base and not os.path.isabs(cwd):
            cwd = os.path.join(base, cwd)
        return cwd

    def _is_fatal(self, action: Action, outcome: ActionOutcome) -> bool:
        """Non-zero exits only end the run under halt_on_error."""
        if not isinstance(outcome.error, NonZeroExit):
            return False
        return self.policy.halt_on_error and not action.command.ignore_exit

    def _fire(self, event: HookEvent, hooks: ActionHook, observer: Optional[Observer]) -> Control:
        if observer is None or event.hook not in hooks:
            return Control.CONTINUE
        return observer(event) or Control.CONTINUE
