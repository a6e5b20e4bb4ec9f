"""Tests for command template resolution."""

import pytest
from actionwizard.engine.errors import TemplateSyntaxError, UnresolvedVariable
from actionwizard.engine.template import interpolate, resolve, stringify


def test_resolve_substitutes_variables():
    """Placeholders are replaced with context values."""
    result = resolve("echo go for {city} on a {transport}", {'city': 'goo', 'transport': 'bus'})

    assert result == "echo go for goo on a bus"


def test_resolve_without_placeholders_returns_template():
    assert resolve("ls -la", {}) == "ls -la"


def test_resolve_missing_variable_fails():
    """Missing variables are an error, never an empty string."""
    with pytest.raises(UnresolvedVariable) as exc_info:
        resolve("echo {city}", {})

    assert exc_info.value.name == 'city'


def test_resolve_missing_variable_fails_even_when_others_resolve():
    with pytest.raises(UnresolvedVariable, match="transport"):
        resolve("echo {city} {transport}", {'city': 'goo'})


def test_resolve_escaped_braces():
    """{{ and }} produce literal braces."""
    assert resolve("echo {{city}}", {'city': 'goo'}) == "echo {city}"
    assert resolve("awk '{{print $1}}' {file}", {'file': 'a.txt'}) == "awk '{print $1}' a.txt"


def test_resolve_is_single_pass():
    """A substituted value is never scanned for placeholders again."""
    result = resolve("echo {a}", {'a': '{b}', 'b': 'boom'})

    assert result == "echo {b}"


def test_resolve_is_idempotent():
    """Resolving twice with the same context gives the same output."""
    variables = {'city': 'goo'}
    template = "echo {city} {city}"

    assert resolve(template, variables) == resolve(template, variables) == "echo goo goo"
    assert variables == {'city': 'goo'}


@pytest.mark.parametrize('template', ["echo {", "echo }", "echo {}", "echo {1abc}", "echo {a b}"])
def test_resolve_malformed_template(template):
    with pytest.raises(TemplateSyntaxError):
        resolve(template, {'a': 'x', '1abc': 'y'})


def test_resolve_dotted_names():
    assert resolve("{services.postgres.port}", {'services.postgres.port': 5432}) == "5432"


def test_resolve_stringifies_booleans():
    assert resolve("--force={confirm}", {'confirm': True}) == "--force=true"
    assert resolve("--force={confirm}", {'confirm': False}) == "--force=false"


def test_stringify():
    assert stringify(None) == ''
    assert stringify(3) == '3'
    assert stringify('x') == 'x'


def test_interpolate_keeps_unknown_placeholders():
    """Prompts are rendered leniently."""
    result = interpolate("Found {count} items in {where}", {'count': 5})

    assert result == "Found 5 items in {where}"


def test_interpolate_never_fails_on_stray_braces():
    assert interpolate("pick { one", {}) == "pick { one"
