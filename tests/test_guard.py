"""Tests for guard expressions."""

import pytest
from actionwizard.engine.errors import GuardEvaluationError
from actionwizard.engine.guard import evaluate_guard, is_truthy, parse_guard


def test_no_guard_always_passes():
    assert evaluate_guard(None, {}) is True


@pytest.mark.parametrize('value,expected', [
    (True, True),
    ('yes', True),
    ('bus', True),
    (1, True),
    (False, False),
    ('', False),
    ('false', False),
    ('No', False),
    ('0', False),
    (0, False),
    (None, False),
])
def test_truthiness(value, expected):
    assert is_truthy(value) is expected
    assert evaluate_guard('flag', {'flag': value}) is expected


def test_truthy_guard_on_missing_variable_is_false():
    assert evaluate_guard('flag', {}) is False


def test_not_guard():
    assert evaluate_guard('not flag', {'flag': False}) is True
    assert evaluate_guard('not flag', {'flag': True}) is False
    assert evaluate_guard('not flag', {}) is True


def test_equality_guard():
    variables = {'transport': 'bus', 'port': 5432, 'confirm': True}

    assert evaluate_guard('transport == bus', variables) is True
    assert evaluate_guard('transport == "bus"', variables) is True
    assert evaluate_guard("transport == 'train'", variables) is False
    assert evaluate_guard('port == 5432', variables) is True
    assert evaluate_guard('confirm == true', variables) is True


def test_inequality_guard():
    assert evaluate_guard('transport != bus', {'transport': 'car'}) is True
    assert evaluate_guard('transport != bus', {'transport': 'bus'}) is False


def test_comparison_with_missing_variable():
    """A missing variable never equals anything."""
    assert evaluate_guard('transport == bus', {}) is False
    assert evaluate_guard('transport != bus', {}) is True


def test_quoted_literal_with_spaces():
    assert evaluate_guard('city == "new york"', {'city': 'new york'}) is True


def test_parse_guard():
    guard = parse_guard('  transport==bus ')

    assert guard.name == 'transport'
    assert guard.op == '=='
    assert guard.literal == 'bus'


@pytest.mark.parametrize('expression', [
    '',
    '   ',
    'transport = bus',
    'a and b',
    'transport == ',
    'x > 3',
    '== bus',
    'city == new york',
])
def test_malformed_guard(expression):
    with pytest.raises(GuardEvaluationError):
        evaluate_guard(expression, {'transport': 'bus'})
