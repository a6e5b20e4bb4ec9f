"""Pydantic models for declarative action lists."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .template import is_variable_name


class InteractionKind(str, Enum):
    """Kinds of question an interaction can ask."""

    INPUT = "input"
    SELECT = "select"
    CONFIRM = "confirm"
    EDITOR = "editor"


class Interaction(BaseModel):
    """
    A question put to the user before an action runs.

    The answer is stored in the variable context under ``out``. Without
    ``out`` the interaction is a pure display/confirmation step.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: InteractionKind = Field(..., description="Interaction kind: input, select, confirm, editor")
    prompt: str = Field(..., description="Question shown to the user, may contain {placeholders}")
    out: Optional[str] = Field(None, description="Variable name that receives the answer")
    options: Optional[List[str]] = Field(None, description="Candidates for kind=select")
    default: Optional[Any] = Field(None, description="Answer used when the user enters nothing")

    @field_validator("out")
    @classmethod
    def _check_out(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value.strip():
            raise ValueError("out must not be empty")
        if not is_variable_name(value):
            raise ValueError(f"out must be a valid variable name, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_constraints(self) -> "Interaction":
        if self.kind == InteractionKind.SELECT:
            if not self.options:
                raise ValueError("select interaction needs a non-empty options list")
            if self.default is not None and str(self.default) not in self.options:
                raise ValueError(f"default {self.default!r} is not one of the options")
        elif self.options is not None:
            raise ValueError(f"options are only valid for kind=select, not {self.kind.value}")

        if self.kind == InteractionKind.CONFIRM and self.default is not None:
            if not isinstance(self.default, bool):
                raise ValueError("confirm default must be true or false")
        return self


class Command(BaseModel):
    """An external command built from a template."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    run: str = Field(..., description="Command template with {placeholders}")
    cwd: Optional[str] = Field(None, description="Working directory override, may contain {placeholders}")
    capture: bool = Field(True, description="Capture stdout/stderr instead of streaming them")
    ignore_exit: bool = Field(False, description="Never halt the run on this command's exit code")

    @field_validator("run")
    @classmethod
    def _check_run(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("run must not be empty")
        return value


class Action(BaseModel):
    """
    A single named step.

    An action can:
    - ask a question (interaction)
    - run a command (command)
    - both, asking first and acting on the answer
    - neither, acting as a marker for progress reporting
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Action identifier, reported to hooks")
    interaction: Optional[Interaction] = Field(None, description="Question to ask")
    command: Optional[Command] = Field(None, description="Command to execute")
    when: Optional[str] = Field(None, description="Guard, e.g. 'confirm', 'not skip', 'env == prod'")
    abort_on_decline: bool = Field(False, description="Stop the whole run if a confirmation is declined")

    @model_validator(mode="before")
    @classmethod
    def _expand_run_shorthand(cls, data: Any) -> Any:
        # "run: <template>" at action level is shorthand for "command: {run: <template>}"
        if isinstance(data, dict) and "run" in data:
            data = dict(data)
            run = data.pop("run")
            if "command" in data:
                raise ValueError("use either 'run' or 'command', not both")
            data["command"] = {"run": run} if isinstance(run, str) else run
        return data

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be empty")
        return value


class RunPolicy(BaseModel):
    """Runner configuration."""

    model_config = ConfigDict(extra="forbid")

    halt_on_error: bool = Field(False, description="Stop the run when a command exits non-zero")
    spawn_failure_fatal: bool = Field(True, description="Stop the run when a command cannot be launched")
    working_dir: Optional[str] = Field(None, description="Base directory for commands (default: current)")


class Workflow(BaseModel):
    """
    A complete document: actions plus their initial variables and policy.
    """

    model_config = ConfigDict(extra="forbid")

    actions: List[Action] = Field(default_factory=list, description="Actions in execution order")
    vars: Dict[str, Any] = Field(default_factory=dict, description="Initial variable context")
    policy: RunPolicy = Field(default_factory=RunPolicy, description="Execution policy")

    @field_validator("vars")
    @classmethod
    def _check_vars(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        for name in value:
            if not is_variable_name(name):
                raise ValueError(f"invalid variable name {name!r}")
        return value
