"""Action engine - runs declarative action lists with injected side effects."""

from .context import VariableContext
from .errors import (
    ActionWizardError,
    Aborted,
    GuardEvaluationError,
    Halted,
    InteractionUnavailable,
    InvalidAnswer,
    NonZeroExit,
    SpawnFailed,
    TemplateError,
    TemplateSyntaxError,
    UnresolvedVariable,
    WorkflowError,
)
from .executor import DryRunExecutor, ExecutionOutcome, Executor, MockExecutor, ShellExecutor
from .guard import evaluate_guard
from .interaction import ConsoleInteractor, Interactor, MockInteractor, validate_answer
from .loader import WorkflowLoader, parse_workflow
from .runner import ActionHook, ActionOutcome, ActionRunner, ActionState, Control, HookEvent, RunResult, RunStatus
from .schema import Action, Command, Interaction, InteractionKind, RunPolicy, Workflow
from .template import interpolate, resolve

__all__ = [
    'VariableContext',
    'ActionWizardError',
    'Aborted',
    'GuardEvaluationError',
    'Halted',
    'InteractionUnavailable',
    'InvalidAnswer',
    'NonZeroExit',
    'SpawnFailed',
    'TemplateError',
    'TemplateSyntaxError',
    'UnresolvedVariable',
    'WorkflowError',
    'DryRunExecutor',
    'ExecutionOutcome',
    'Executor',
    'MockExecutor',
    'ShellExecutor',
    'evaluate_guard',
    'ConsoleInteractor',
    'Interactor',
    'MockInteractor',
    'validate_answer',
    'WorkflowLoader',
    'parse_workflow',
    'ActionHook',
    'ActionOutcome',
    'ActionRunner',
    'ActionState',
    'Control',
    'HookEvent',
    'RunResult',
    'RunStatus',
    'Action',
    'Command',
    'Interaction',
    'InteractionKind',
    'RunPolicy',
    'Workflow',
    'interpolate',
    'resolve',
]
