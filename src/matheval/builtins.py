"""
Built-in functions and reserved identifiers.

All built-in functions are pure and deterministic. Domain and overflow
conditions come back as NaN/inf (see policy.guarded) and are classified by
the caller.
"""

import math
from typing import Callable, Dict, FrozenSet, List

from .policy import factorial, guarded
from .tokenizer import CONSTANTS, FUNCTIONS, TokenType

# Signature of a one-argument built-in.
UnaryFunction = Callable[[float], float]


def _guard(func: UnaryFunction) -> UnaryFunction:
    return lambda value: guarded(func, value)


# Functions taking exactly one argument. fact additionally rejects negative
# operands before it is called.
ONE_ARGUMENT_FUNCTIONS: Dict[TokenType, UnaryFunction] = {
    TokenType.SIN: _guard(math.sin),
    TokenType.COS: _guard(math.cos),
    TokenType.TAN: _guard(math.tan),
    TokenType.ASIN: _guard(math.asin),
    TokenType.ACOS: _guard(math.acos),
    TokenType.ATAN: _guard(math.atan),
    TokenType.EXP: _guard(math.exp),
    TokenType.FACT: factorial,
}

# Signature of a built-in taking one or more arguments.
VariadicFunction = Callable[[List[float]], float]


def _average(values: List[float]) -> float:
    total = values[0]
    for value in values[1:]:
        total += value
    return total / len(values)


# Functions taking one or more comma separated arguments, applied to the
# argument list in order
VARIADIC_FUNCTIONS: Dict[TokenType, VariadicFunction] = {
    TokenType.MAX: max,
    TokenType.MIN: min,
    TokenType.AVG: _average,
}

# Names that cannot be bound as parameters
RESERVED_NAMES: FrozenSet[str] = frozenset(CONSTANTS) | frozenset(FUNCTIONS)


def is_reserved_name(name: str) -> bool:
    """Checks if a name is a built-in constant or function name."""
    return name in RESERVED_NAMES


def power(base: float, exponent: float) -> float:
    """base raised to exponent; NaN for complex results, inf on overflow."""
    return guarded(math.pow, base, exponent)
