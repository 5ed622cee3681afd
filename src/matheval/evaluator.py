"""
Expression evaluator.

Single-pass recursive descent: values are computed while the text is read,
no syntax tree is built.

Precedence (highest to lowest):
1. Round brackets and function calls
2. Factorial: !
3. Exponentiation: ^ (right-associative)
4. Sign of a term: unary +, -
5. Multiplicative: *, /
6. Additive: +, -

The sign binds looser than ! and ^, so -3^2 is -(3^2) = -9, while a sign
right after ^ belongs to the exponent: 2^-2 = 0.25.

Round brackets are not matched with a stack. A single depth counter goes up
on every '(' and down on every ')'; each nested sum stops when the counter
returns to the value it had before its bracket was opened.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .builtins import ONE_ARGUMENT_FUNCTIONS, VARIADIC_FUNCTIONS, power
from .config import DEFAULT_EVALUATION_CONFIG, EvaluationConfig
from .errors import DomainError, ErrorKind, MathEvalError, ParseError, RangeError
from .limits import check_bracket_depth, check_expression_length
from .params import ParameterTable
from .policy import factorial, guarded, is_invalid, log_base
from .tokenizer import FUNCTION_TOKENS, Token, Tokenizer, TokenType

# Error reported when a sum stops on a token none of its triggers expects
_STRUCTURAL_ERRORS = {
    TokenType.EOF: ErrorKind.UNEXPECTED_END,
    TokenType.RPAREN: ErrorKind.UNEXPECTED_CLOSE_BRACKET,
    TokenType.COMMA: ErrorKind.UNEXPECTED_COMMA,
}

# Never equal to the bracket depth, which cannot go below zero
_NO_DEPTH = -1


@dataclass
class EvaluationResult:
    """Result of an expression evaluation."""

    value: float
    """The evaluated value, 0.0 on failure."""

    success: bool
    """Whether evaluation succeeded."""

    error: Optional[str] = None
    """Error message if evaluation failed."""

    error_kind: Optional[ErrorKind] = None
    """Error kind if evaluation failed."""

    position: int = 0
    """Approximate offset in the expression where the error was detected."""


class Evaluator:
    """
    Evaluates one expression.

    Holds the parsing state of a single evaluation: the tokenizer cursor and
    the bracket depth counter.
    """

    def __init__(
        self,
        source: str,
        params: Optional[ParameterTable] = None,
        config: Optional[EvaluationConfig] = None,
    ):
        config = config or DEFAULT_EVALUATION_CONFIG
        self._source = source
        self._check_fp_exceptions = config.check_fp_exceptions
        self._limits = config.resolve_limits()
        self._tokenizer = Tokenizer(source, params, self._check_fp_exceptions)
        self.depth = 0

    @property
    def position(self) -> int:
        """Current cursor offset into the expression."""
        return self._tokenizer.position

    def evaluate(self) -> float:
        """
        Evaluates the whole expression.

        Raises:
            MathEvalError: On the first lexical, structural, domain or range
                error encountered
        """
        self._tokenizer.position = 0
        self.depth = 0

        check_expression_length(self._source, self._limits)

        value, _ = self._process_addends(_NO_DEPTH, True, False)
        return value

    # ============================================================
    # Helpers
    # ============================================================

    def _next(self) -> Token:
        return self._tokenizer.next_token()

    def _fail(self, error_class: type, kind: ErrorKind) -> MathEvalError:
        return error_class(kind, self.position, self._source)

    def _checked(self, value: float) -> float:
        if self._check_fp_exceptions and is_invalid(value):
            raise self._fail(RangeError, ErrorKind.INVALID_RESULT)
        return value

    def _open_bracket(self) -> None:
        self.depth += 1
        check_bracket_depth(self.depth, self._limits, self.position, self._source)

    # ============================================================
    # Grammar levels
    # ============================================================

    def _process_addends(
        self,
        break_on_depth: int,
        break_on_eof: bool,
        break_on_comma: bool,
    ) -> Tuple[float, TokenType]:
        """
        Evaluates A1 [+- A2 [+- A3 ...]] and returns the sum together with the
        token that ended it.

        Exits when the bracket depth drops to break_on_depth, or on end of
        input / comma when the matching flag is set. Any other stop is an
        error.
        """
        result = 0.0
        right_op = TokenType.PLUS

        while True:
            left_op = right_op

            # Each addend is evaluated as the product 1 * A
            value, right_op = self._process_factors(1.0, TokenType.STAR, False)

            result = result + value if left_op == TokenType.PLUS else result - value

            if right_op not in (TokenType.PLUS, TokenType.MINUS):
                break

        if right_op == TokenType.RPAREN:
            self.depth -= 1
            if self.depth < 0:
                raise self._fail(ParseError, ErrorKind.UNEXPECTED_CLOSE_BRACKET)

        if (
            self.depth == break_on_depth
            or (break_on_eof and right_op == TokenType.EOF)
            or (break_on_comma and right_op == TokenType.COMMA)
        ):
            return self._checked(result), right_op

        kind = _STRUCTURAL_ERRORS.get(right_op, ErrorKind.UNEXPECTED_SYMBOL)
        raise self._fail(ParseError, kind)

    def _process_factors(
        self,
        left_value: float,
        op: TokenType,
        is_exponent: bool,
    ) -> Tuple[float, TokenType]:
        """
        Evaluates F1 [*/ F2 [*/ F3 ...]] starting from an already known left
        value, and returns the product with the operator that follows it.

        In exponent context a single signed factor is read, since ^ binds
        tighter than * and /.
        """
        while True:
            token = self._next()

            # Unary sign: remember it and move to the operand
            sign = 1.0
            if token.type == TokenType.MINUS:
                sign = -1.0
                token = self._next()
            elif token.type == TokenType.PLUS:
                token = self._next()

            if token.type == TokenType.LPAREN:
                self._open_bracket()
                right_value, _ = self._process_addends(self.depth - 1, False, False)
            elif token.type in FUNCTION_TOKENS:
                right_value = self._process_function(token.type)
            elif token.type == TokenType.VALUE:
                right_value = token.value
            else:
                raise self._fail(ParseError, ErrorKind.EXPECTED_VALUE)

            # Look ahead for postfix factorial and exponentiation
            next_op = self._next().type

            if next_op == TokenType.BANG:
                right_value, next_op = self._process_factorial(right_value)

            if next_op == TokenType.CARET:
                right_value, next_op = self._process_exponentiation(right_value)

            if op == TokenType.STAR:
                left_value = left_value * right_value * sign
            else:
                if right_value == 0:
                    raise self._fail(DomainError, ErrorKind.DIVISION_BY_ZERO)
                left_value = left_value / right_value * sign

            left_value = self._checked(left_value)

            op = next_op

            if op not in (TokenType.STAR, TokenType.SLASH) or is_exponent:
                return left_value, op

    def _process_exponentiation(self, base: float) -> Tuple[float, TokenType]:
        exponent, next_op = self._process_factors(1.0, TokenType.STAR, True)
        return self._checked(power(base, exponent)), next_op

    def _process_factorial(self, value: float) -> Tuple[float, TokenType]:
        if value < 0:
            raise self._fail(DomainError, ErrorKind.NEGATIVE_FACTORIAL)

        result = self._checked(factorial(value))
        return result, self._next().type

    def _process_function(self, func: TokenType) -> float:
        """
        Evaluates the bracketed, comma separated arguments of a function and
        applies it. The function name has already been consumed.
        """
        if self._next().type != TokenType.LPAREN:
            raise self._fail(ParseError, ErrorKind.EXPECTED_OPEN_BRACKET)

        self._open_bracket()
        closing_depth = self.depth - 1

        if func in ONE_ARGUMENT_FUNCTIONS:
            argument, _ = self._process_addends(closing_depth, False, False)
            if func == TokenType.FACT and argument < 0:
                raise self._fail(DomainError, ErrorKind.NEGATIVE_FACTORIAL)
            result = ONE_ARGUMENT_FUNCTIONS[func](argument)

        elif func == TokenType.POW:
            base, _ = self._process_addends(_NO_DEPTH, False, True)
            exponent, _ = self._process_addends(closing_depth, False, False)
            result = power(base, exponent)

        elif func == TokenType.LOG:
            # log(n) is the natural logarithm, log(b, n) has base b
            first, stop = self._process_addends(closing_depth, False, True)
            if stop == TokenType.RPAREN:
                result = guarded(math.log, first)
            else:
                second, _ = self._process_addends(closing_depth, False, False)
                result = log_base(first, second)

        else:
            arguments = []
            stop = TokenType.COMMA
            while stop == TokenType.COMMA:
                value, stop = self._process_addends(closing_depth, False, True)
                arguments.append(value)
            result = VARIADIC_FUNCTIONS[func](arguments)

        return self._checked(result)


def evaluate(
    source: str,
    params: Optional[ParameterTable] = None,
    config: Optional[EvaluationConfig] = None,
) -> EvaluationResult:
    """
    Evaluates an expression and returns the result.

    Args:
        source: The expression to evaluate
        params: Optional parameter bindings
        config: Optional evaluation configuration

    Returns:
        The evaluation result with value and success status
    """
    evaluator = Evaluator(source, params, config)
    try:
        value = evaluator.evaluate()
        return EvaluationResult(value=value, success=True)
    except MathEvalError as error:
        return EvaluationResult(
            value=0.0,
            success=False,
            error=error.message,
            error_kind=error.kind,
            position=error.position if error.position is not None else evaluator.position,
        )
