"""
Error types for the expression evaluator.

Every failure is identified by an ErrorKind. The engine raises the
MathEvalError subclass matching the kind's category; display text is looked
up from the kind only when an error is rendered.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Tagged error kinds produced by binding and evaluation."""

    # Lexical
    UNEXPECTED_SYMBOL = "unexpected_symbol"
    EXPECTED_VALUE = "expected_value"

    # Structural
    EXPECTED_OPEN_BRACKET = "expected_open_bracket"
    UNEXPECTED_END = "unexpected_end"
    UNEXPECTED_CLOSE_BRACKET = "unexpected_close_bracket"
    UNEXPECTED_COMMA = "unexpected_comma"

    # Domain
    DIVISION_BY_ZERO = "division_by_zero"
    NEGATIVE_FACTORIAL = "negative_factorial"

    # Range / representability
    VALUE_TOO_BIG = "value_too_big"
    INVALID_RESULT = "invalid_result"

    # Parameter binding
    EMPTY_PARAMETER_NAME = "empty_parameter_name"
    PARAMETER_NAME_TOO_LONG = "parameter_name_too_long"
    RESERVED_PARAMETER_NAME = "reserved_parameter_name"
    INVALID_PARAMETER_NAME = "invalid_parameter_name"

    # Limits
    LIMIT_EXCEEDED = "limit_exceeded"

    @property
    def message(self) -> str:
        """Human readable description of the error kind."""
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    ErrorKind.UNEXPECTED_SYMBOL: "unexpected symbol",
    ErrorKind.EXPECTED_VALUE: "expected value",
    ErrorKind.EXPECTED_OPEN_BRACKET: "expected open round bracket after function name",
    ErrorKind.UNEXPECTED_END: "unexpected end of expression",
    ErrorKind.UNEXPECTED_CLOSE_BRACKET: "unexpected close round bracket",
    ErrorKind.UNEXPECTED_COMMA: "unexpected comma",
    ErrorKind.DIVISION_BY_ZERO: "division by zero",
    ErrorKind.NEGATIVE_FACTORIAL: "attempt to evaluate factorial of negative number",
    ErrorKind.VALUE_TOO_BIG: "value is too big",
    ErrorKind.INVALID_RESULT: "result is complex or too big",
    ErrorKind.EMPTY_PARAMETER_NAME: "parameter name is empty",
    ErrorKind.PARAMETER_NAME_TOO_LONG: "parameter name exceeds 255 characters in length",
    ErrorKind.RESERVED_PARAMETER_NAME: "parameter name is a reserved keyword",
    ErrorKind.INVALID_PARAMETER_NAME: "invalid character in parameter name",
    ErrorKind.LIMIT_EXCEEDED: "expression exceeds configured limits",
}


class MathEvalError(Exception):
    """
    Base error class for all evaluator errors.
    """

    def __init__(
        self,
        kind: ErrorKind,
        position: Optional[int] = None,
        expression: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        message = kind.message if detail is None else f"{kind.message}: {detail}"
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns the message followed by the expression and a caret line
        pointing at the position the error was detected.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n{self.expression}\n{pointer}"


class TokenizerError(MathEvalError):
    """
    Lexical error: unrecognized symbol or malformed literal.
    """

    pass


class ParseError(MathEvalError):
    """
    Structural error: the token sequence does not fit the grammar.
    """

    pass


class DomainError(MathEvalError):
    """
    Operation outside its mathematical domain (division by zero,
    factorial of a negative number).
    """

    pass


class RangeError(MathEvalError):
    """
    A value is not a finite real number.
    """

    pass


class ParameterError(MathEvalError):
    """
    A parameter name was rejected by the parameter table.
    """

    def __init__(self, kind: ErrorKind, name: str):
        super().__init__(kind)
        self.name = name


class LimitExceededError(MathEvalError):
    """
    Error raised when a configured evaluation limit is exceeded.
    """

    def __init__(
        self,
        limit_name: str,
        limit: int,
        actual: int,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        detail = f"{limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(ErrorKind.LIMIT_EXCEEDED, position, expression, detail)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
