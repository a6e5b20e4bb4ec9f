"""Tests for VariableContext."""

import pytest
from actionwizard.engine.context import VariableContext
from actionwizard.engine.errors import UnresolvedVariable


def test_context_starts_empty():
    context = VariableContext()

    assert len(context) == 0
    assert context.as_dict() == {}


def test_context_set_and_get():
    context = VariableContext()
    context.set('city', 'goo')

    assert context.get('city') == 'goo'
    assert context['city'] == 'goo'
    assert 'city' in context


def test_context_get_missing_never_fails():
    context = VariableContext()

    assert context.get('missing') is None
    assert context.get('missing', 'fallback') == 'fallback'


def test_context_last_write_wins():
    context = VariableContext()
    context.set('city', 'goo')
    context.set('city', 'tlv')

    assert context['city'] == 'tlv'
    assert len(context) == 1


def test_context_keeps_insertion_order():
    context = VariableContext()
    for name in ['c', 'a', 'b']:
        context.set(name, name.upper())

    assert list(context) == ['c', 'a', 'b']


def test_context_copies_initial_mapping():
    """The caller's mapping is never mutated."""
    initial = {'city': 'goo'}
    context = VariableContext(initial)
    context.set('transport', 'bus')

    assert initial == {'city': 'goo'}
    assert context == {'city': 'goo', 'transport': 'bus'}


def test_context_render():
    context = VariableContext({'city': 'goo'})

    assert context.render("echo go for {city}") == "echo go for goo"

    with pytest.raises(UnresolvedVariable):
        context.render("echo {transport}")


def test_context_copy_is_independent():
    context = VariableContext({'city': 'goo'})
    clone = context.copy()
    clone.set('city', 'tlv')

    assert context['city'] == 'goo'
