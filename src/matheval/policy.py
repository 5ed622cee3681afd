"""
Numeric exception policy.

A floating-point value is "invalid" when it is NaN or infinite. Python's
math module reports these conditions by raising instead of returning
NaN/inf; guarded() maps those exceptions back to values so that is_invalid()
stays the single classification point.
"""

import math
from typing import Callable


def is_invalid(value: float) -> bool:
    """Returns True if value is NaN or positive/negative infinity."""
    return math.isnan(value) or math.isinf(value)


def guarded(func: Callable[..., float], *args: float) -> float:
    """
    Calls a math function, returning NaN for domain errors and +inf for
    overflows instead of raising.
    """
    try:
        return func(*args)
    except OverflowError:
        return math.inf
    except (ValueError, ZeroDivisionError):
        return math.nan


def factorial(value: float) -> float:
    """Generalized factorial, Γ(x + 1)."""
    return guarded(math.gamma, value + 1)


def log_base(base: float, value: float) -> float:
    """Logarithm of value in the given base."""
    return guarded(lambda b, x: math.log(x) / math.log(b), base, value)
