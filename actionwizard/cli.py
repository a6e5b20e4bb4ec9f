import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer

from .engine import (
    ActionHook,
    ActionRunner,
    ConsoleInteractor,
    DryRunExecutor,
    HookEvent,
    RunStatus,
    ShellExecutor,
    WorkflowError,
    WorkflowLoader,
)
from .engine.template import is_variable_name

logger = logging.getLogger(__name__)

app = typer.Typer(help="Run declarative interactive actions.")


def parse_vars(pairs: List[str]) -> Dict[str, str]:
    """Turn ["city=goo", "transport=bus"] into {'city': 'goo', 'transport': 'bus'}."""
    values = {}
    for pair in pairs:
        if '=' not in pair:
            raise typer.BadParameter(f"expected name=value, got: {pair}")
        name, value = pair.split('=', 1)
        name = name.strip()
        if not is_variable_name(name):
            raise typer.BadParameter(f"invalid variable name: {name!r}")
        values[name] = value
    return values


def report_progress(event: HookEvent) -> None:
    """Print progress for every action."""
    name = event.action.name
    if event.hook == ActionHook.BEFORE:
        if not event.skipped:
            typer.echo(f"==> {name}")
        return

    if event.skipped:
        typer.echo(f"--- {name} (skipped)")
        return

    outcome = event.outcome
    if outcome.execution and outcome.execution.stdout:
        typer.echo(outcome.execution.stdout.rstrip('\n'))
    if outcome.error is not None:
        typer.secho(f"!!! {name}: {outcome.error}", fg=typer.colors.YELLOW, err=True)


def _load(workflow: Path):
    try:
        return WorkflowLoader().load(workflow)
    except (FileNotFoundError, WorkflowError) as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)


@app.command()
def run(
    workflow: Path = typer.Argument(..., help="YAML or JSON workflow file"),
    var: List[str] = typer.Option([], "--var", help="Initial variable as name=value (repeatable)"),
    cwd: Optional[Path] = typer.Option(None, help="Working directory for commands"),
    halt_on_error: bool = typer.Option(False, "--halt-on-error", help="Stop on the first non-zero exit"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands instead of running them"),
    verbose: bool = typer.Option(False, "--verbose", envvar="ACTIONWIZARD_VERBOSE", help="Debug logging"),
):
    """Run every action in WORKFLOW."""
    level = logging.DEBUG if verbose else logging.INFO if dry_run else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    flow = _load(workflow)

    policy = flow.policy.model_copy()
    if halt_on_error:
        policy.halt_on_error = True
    if cwd is not None:
        policy.working_dir = str(cwd)

    initial = dict(flow.vars)
    initial.update(parse_vars(var))

    executor = DryRunExecutor() if dry_run else ShellExecutor(verbose=verbose)
    runner = ActionRunner(ConsoleInteractor(), executor, policy=policy)
    result = runner.run(flow.actions, initial, ActionHook.BOTH, report_progress)

    if result.status == RunStatus.ABORTED:
        logger.debug("Run aborted: %r", result.error)
        typer.secho(f"Aborted: {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    failed = len(result.failed)
    typer.echo(f"Completed {len(result.outcomes)} actions" + (f", {failed} with errors" if failed else ""))


@app.command()
def validate(workflow: Path = typer.Argument(..., help="YAML or JSON workflow file")):
    """Check WORKFLOW against the schema without running it."""
    flow = _load(workflow)
    typer.echo(f"{workflow}: {len(flow.actions)} actions OK")


def main():
    app()


if __name__ == "__main__":
    main()
