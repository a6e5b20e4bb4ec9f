"""Command template resolution.

Templates use ``{name}`` placeholders. ``{{`` and ``}}`` stand for literal
braces. Resolution is a single left-to-right pass: substituted values are
never scanned again.
"""

import re
from typing import Any, Mapping

from .errors import TemplateSyntaxError, UnresolvedVariable

VARIABLE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_.\-]*")

# Escapes first so "{{" is never read as the start of a placeholder.
_TOKEN = re.compile(r"\{\{|\}\}|\{([^{}]*)\}|[{}]")


def stringify(value: Any) -> str:
    """Render a context value the way it appears in a command line.

    Examples:
        >>> stringify(True)
        'true'
        >>> stringify(8080)
        '8080'
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def is_variable_name(name: str) -> bool:
    return VARIABLE_NAME.fullmatch(name) is not None


def resolve(template: str, variables: Mapping[str, Any]) -> str:
    """Substitute every ``{name}`` in template with its value.

    Args:
        template: Command template
        variables: Variable context (any mapping)

    Returns:
        The fully substituted string

    Raises:
        UnresolvedVariable: A placeholder names a variable that is not set
        TemplateSyntaxError: Stray brace or malformed placeholder

    Examples:
        >>> resolve("echo go for {city}", {'city': 'goo'})
        'echo go for goo'
        >>> resolve("echo {{literal}}", {})
        'echo {literal}'
    """
    def replacer(match):
        token = match.group(0)
        if token == '{{':
            return '{'
        if token == '}}':
            return '}'

        name = match.group(1)
        if name is None:
            raise TemplateSyntaxError(template, match.start(), f"unmatched '{token}'")
        name = name.strip()
        if not is_variable_name(name):
            raise TemplateSyntaxError(template, match.start(), f"malformed placeholder {token!r}")
        if name not in variables:
            raise UnresolvedVariable(name)
        return stringify(variables[name])

    return _TOKEN.sub(replacer, template)


def interpolate(text: str, variables: Mapping[str, Any]) -> str:
    """Lenient variant of resolve() for display text such as prompts.

    Unknown or malformed placeholders and stray braces are kept as written.

    Examples:
        >>> interpolate("Found {count} items in {where}", {'count': 5})
        'Found 5 items in {where}'
    """
    def replacer(match):
        token = match.group(0)
        if token == '{{':
            return '{'
        if token == '}}':
            return '}'

        name = match.group(1)
        if name is not None and name.strip() in variables:
            return stringify(variables[name.strip()])
        return token

    return _TOKEN.sub(replacer, text)
