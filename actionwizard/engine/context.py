"""Variable context - answers captured during a run."""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from .template import resolve


class VariableContext(Mapping):
    """
    Ordered mapping of variable name to captured value.

    One context belongs to one run. Later writes to a name overwrite
    earlier ones; insertion order is kept for reporting.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(initial or {})

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"VariableContext({self._values!r})"

    def set(self, name: str, value: Any) -> None:
        """Insert or overwrite a variable."""
        self._values[name] = value

    def render(self, template: str) -> str:
        """Resolve a command template against this context."""
        return resolve(template, self)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def copy(self) -> 'VariableContext':
        return VariableContext(self._values)
