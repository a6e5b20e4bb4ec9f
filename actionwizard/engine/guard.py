"""Guard expressions - decide whether an action runs.

Grammar (one expression per guard, whitespace around tokens is ignored):

    name                 variable is set and truthy
    not name             variable is unset or falsy
    name == literal      stringified variable equals literal
    name != literal      stringified variable differs from literal

Literals may be bare words or quoted with ' or ". Values that count as
falsy: False, None, '' and the strings false/no/n/0/off in any case.
"""

import re
from typing import Any, Mapping, NamedTuple, Optional

from .errors import GuardEvaluationError
from .template import VARIABLE_NAME, stringify

FALSY_STRINGS = frozenset({'', 'false', 'no', 'n', '0', 'off'})

_NAME = VARIABLE_NAME.pattern
_TRUTHY = re.compile(rf"^(?P<negate>not\s+)?(?P<name>{_NAME})$")
_COMPARE = re.compile(
    rf"^(?P<name>{_NAME})\s*(?P<op>==|!=)\s*"
    r"""(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\s'"]+))$"""
)


class Guard(NamedTuple):
    """A parsed guard expression."""

    name: str
    op: str  # 'truthy', 'not', '==' or '!='
    literal: Optional[str] = None


def is_truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_STRINGS
    return bool(value)


def parse_guard(expression: str) -> Guard:
    """Parse a guard expression.

    Raises:
        GuardEvaluationError: Expression does not match the grammar
    """
    text = expression.strip()
    if not text:
        raise GuardEvaluationError(expression, "empty expression")

    match = _TRUTHY.match(text)
    if match:
        op = 'not' if match.group('negate') else 'truthy'
        return Guard(match.group('name'), op)

    match = _COMPARE.match(text)
    if match:
        literal = next(
            group for group in (match.group('dq'), match.group('sq'), match.group('bare'))
            if group is not None
        )
        return Guard(match.group('name'), match.group('op'), literal)

    raise GuardEvaluationError(
        expression, "expected 'name', 'not name', 'name == value' or 'name != value'"
    )


def evaluate_guard(expression: Optional[str], variables: Mapping[str, Any]) -> bool:
    """Evaluate a guard against the current variables.

    A missing guard always passes. A missing variable is falsy and never
    equal to any literal.

    Examples:
        >>> evaluate_guard("transport == bus", {'transport': 'bus'})
        True
        >>> evaluate_guard("not confirm", {'confirm': True})
        False
    """
    if expression is None:
        return True

    guard = parse_guard(expression)
    present = guard.name in variables
    value = variables.get(guard.name)

    if guard.op == 'truthy':
        return present and is_truthy(value)
    if guard.op == 'not':
        return not (present and is_truthy(value))

    equal = present and stringify(value) == guard.literal
    return equal if guard.op == '==' else not equal
