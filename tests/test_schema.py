"""Tests for Pydantic schema models."""

import pytest
from pydantic import ValidationError
from actionwizard.engine.schema import Action, Command, Interaction, InteractionKind, RunPolicy, Workflow


def test_action_minimal_valid():
    """Action can be created with only a name (a marker action)."""
    action = Action(name='start')

    assert action.name == 'start'
    assert action.interaction is None
    assert action.command is None
    assert action.when is None
    assert action.abort_on_decline is False


def test_action_with_all_fields():
    action = Action(
        name='transport',
        interaction=Interaction(
            kind='select',
            prompt='pick a transport',
            options=['car', 'bus', 'train'],
            default='bus',
            out='transport',
        ),
        command=Command(run='echo {transport}', cwd='/tmp', capture=False, ignore_exit=True),
        when='ready',
        abort_on_decline=True,
    )

    assert action.interaction.kind == InteractionKind.SELECT
    assert action.interaction.options == ['car', 'bus', 'train']
    assert action.command.run == 'echo {transport}'
    assert action.command.cwd == '/tmp'
    assert action.command.capture is False
    assert action.command.ignore_exit is True


def test_action_run_shorthand():
    """'run' at action level expands into a command."""
    action = Action.model_validate({'name': 'go', 'run': 'echo go'})

    assert action.command == Command(run='echo go')


def test_action_run_and_command_conflict():
    with pytest.raises(ValidationError, match="either 'run' or 'command'"):
        Action.model_validate({'name': 'go', 'run': 'echo a', 'command': {'run': 'echo b'}})


def test_action_requires_name():
    with pytest.raises(ValidationError):
        Action()

    with pytest.raises(ValidationError):
        Action(name='   ')


def test_action_is_immutable():
    action = Action(name='start')

    with pytest.raises(ValidationError):
        action.name = 'other'


def test_action_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        Action.model_validate({'name': 'go', 'rnu': 'echo typo'})


def test_interaction_out_must_not_be_empty():
    with pytest.raises(ValidationError, match="must not be empty"):
        Interaction(kind='input', prompt='city?', out='')


def test_interaction_out_must_be_a_variable_name():
    with pytest.raises(ValidationError):
        Interaction(kind='input', prompt='city?', out='my city')


def test_interaction_without_out():
    interaction = Interaction(kind='confirm', prompt='are you ready?')

    assert interaction.out is None


def test_interaction_unknown_kind():
    with pytest.raises(ValidationError):
        Interaction(kind='checkbox', prompt='pick')


def test_select_requires_options():
    with pytest.raises(ValidationError, match="options"):
        Interaction(kind='select', prompt='pick')


def test_select_default_must_be_an_option():
    with pytest.raises(ValidationError, match="not one of the options"):
        Interaction(kind='select', prompt='pick', options=['bus'], default='car')


def test_options_only_for_select():
    with pytest.raises(ValidationError, match="only valid for kind=select"):
        Interaction(kind='input', prompt='city?', options=['a'])


def test_confirm_default_must_be_bool():
    with pytest.raises(ValidationError):
        Interaction(kind='confirm', prompt='sure?', default='yes')


def test_command_run_must_not_be_empty():
    with pytest.raises(ValidationError):
        Command(run='  ')


def test_run_policy_defaults():
    policy = RunPolicy()

    assert policy.halt_on_error is False
    assert policy.spawn_failure_fatal is True
    assert policy.working_dir is None


def test_workflow_from_dict():
    workflow = Workflow.model_validate({
        'vars': {'city': 'dallas'},
        'policy': {'halt_on_error': True},
        'actions': [
            {'name': 'start', 'interaction': {'kind': 'confirm', 'prompt': 'ready?'}},
            {'name': 'go', 'run': 'echo {city}'},
        ],
    })

    assert [a.name for a in workflow.actions] == ['start', 'go']
    assert workflow.vars == {'city': 'dallas'}
    assert workflow.policy.halt_on_error is True


def test_workflow_rejects_invalid_var_names():
    with pytest.raises(ValidationError):
        Workflow.model_validate({'vars': {'bad name': 1}})
