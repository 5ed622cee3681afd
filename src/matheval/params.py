"""
Parameter table.

Named values usable in place of literals. The tokenizer matches parameter
names as prefixes of the remaining input, so entries are kept ordered by
decreasing name length: a name that is a prefix of a longer one ("a" and
"abc") must never shadow it.
"""

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .builtins import is_reserved_name
from .errors import ErrorKind, ParameterError

MAX_PARAMETER_NAME_LENGTH = 255


def _is_ascii_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def validate_parameter_name(name: str) -> None:
    """
    Validates a parameter name.

    Raises:
        ParameterError: If the name is empty, too long, reserved, or contains
            characters other than ASCII letters and digits (first character
            must be a letter)
    """
    if len(name) == 0:
        raise ParameterError(ErrorKind.EMPTY_PARAMETER_NAME, name)

    if len(name) > MAX_PARAMETER_NAME_LENGTH:
        raise ParameterError(ErrorKind.PARAMETER_NAME_TOO_LONG, name)

    if is_reserved_name(name):
        raise ParameterError(ErrorKind.RESERVED_PARAMETER_NAME, name)

    for index, ch in enumerate(name):
        if _is_ascii_letter(ch) or (index > 0 and _is_ascii_digit(ch)):
            continue
        raise ParameterError(ErrorKind.INVALID_PARAMETER_NAME, name)


class ParameterTable:
    """Case-sensitive name to value bindings, longest names first."""

    def __init__(self) -> None:
        self._values: Dict[str, float] = {}
        self._order: List[str] = []

    def bind(self, name: str, value: float) -> None:
        """
        Binds a value to a name, overwriting any previous value.

        Raises:
            ParameterError: If the name is not a valid parameter name
        """
        validate_parameter_name(name)

        if name in self._values:
            self._values[name] = float(value)
            return

        # Insert before the first entry with a strictly shorter name
        index = len(self._order)
        for i, existing in enumerate(self._order):
            if len(existing) < len(name):
                index = i
                break

        self._order.insert(index, name)
        self._values[name] = float(value)

    def update(self, bindings: Mapping[str, float]) -> None:
        """Binds every name in a mapping."""
        for name, value in bindings.items():
            self.bind(name, value)

    def match_prefix(self, text: str, position: int = 0) -> Optional[Tuple[float, int]]:
        """
        Returns (value, length) of the first bound name found at position in
        text, trying longer names first, or None if no name matches.
        """
        for name in self._order:
            if text.startswith(name, position):
                return self._values[name], len(name)
        return None

    def get(self, name: str, default: Optional[float] = None) -> Optional[float]:
        return self._values.get(name, default)

    def items(self) -> List[Tuple[str, float]]:
        """Bindings in matching order."""
        return [(name, self._values[name]) for name in self._order]

    def clear(self) -> None:
        self._values.clear()
        self._order.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._order))

    def __repr__(self) -> str:
        return f"ParameterTable({dict(self.items())!r})"
