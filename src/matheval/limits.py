"""
Resource limits for expression evaluation.

Recursion in the evaluator follows the bracket and function nesting of the
input text. Embedders that evaluate untrusted text can bound it here.
Both limits are disabled by default.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class EvaluationLimits:
    """Evaluation limits configuration."""

    # Maximum expression length in characters (None: unbounded)
    max_expression_length: Optional[int] = None

    # Maximum number of simultaneously open round brackets (None: unbounded)
    max_bracket_depth: Optional[int] = None


DEFAULT_EVALUATION_LIMITS = EvaluationLimits()


def check_expression_length(
    expression: str, limits: Optional[EvaluationLimits] = None
) -> None:
    """Validates that expression length is within limits."""
    limits = limits or DEFAULT_EVALUATION_LIMITS
    if (
        limits.max_expression_length is not None
        and len(expression) > limits.max_expression_length
    ):
        raise LimitExceededError(
            "expression length",
            limits.max_expression_length,
            len(expression),
            0,
            expression,
        )


def check_bracket_depth(
    depth: int,
    limits: Optional[EvaluationLimits] = None,
    position: Optional[int] = None,
    expression: Optional[str] = None,
) -> None:
    """Validates bracket nesting depth during evaluation."""
    limits = limits or DEFAULT_EVALUATION_LIMITS
    if limits.max_bracket_depth is not None and depth > limits.max_bracket_depth:
        raise LimitExceededError(
            "bracket depth", limits.max_bracket_depth, depth, position, expression
        )
