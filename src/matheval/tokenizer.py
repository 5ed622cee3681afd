"""
Tokenizer (lexer) for arithmetic expressions.

The tokenizer is pull-based: the evaluator asks for one token at a time and
consumes it immediately, so the cursor position is the only state carried
between calls.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .errors import ErrorKind, RangeError, TokenizerError
from .policy import guarded, is_invalid

if TYPE_CHECKING:
    from .params import ParameterTable


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    # Special
    EOF = "EOF"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    CARET = "CARET"
    BANG = "BANG"

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"

    # Functions
    SIN = "SIN"
    COS = "COS"
    TAN = "TAN"
    ASIN = "ASIN"
    ACOS = "ACOS"
    ATAN = "ATAN"
    FACT = "FACT"
    EXP = "EXP"
    POW = "POW"
    LOG = "LOG"
    MAX = "MAX"
    MIN = "MIN"
    AVG = "AVG"

    # Literals, constants and parameters
    VALUE = "VALUE"


@dataclass
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: float
    position: int


# Named constants
CONSTANTS: Dict[str, float] = {
    "e": math.e,
    "pi": math.pi,
}

# Function names; "average" and "avg" spell the same function
FUNCTIONS: Dict[str, TokenType] = {
    "sin": TokenType.SIN,
    "cos": TokenType.COS,
    "tan": TokenType.TAN,
    "asin": TokenType.ASIN,
    "acos": TokenType.ACOS,
    "atan": TokenType.ATAN,
    "fact": TokenType.FACT,
    "exp": TokenType.EXP,
    "pow": TokenType.POW,
    "log": TokenType.LOG,
    "max": TokenType.MAX,
    "min": TokenType.MIN,
    "average": TokenType.AVG,
    "avg": TokenType.AVG,
}

# Keywords tried longest first, so "exp" wins over "e" and "average" over "avg"
KEYWORDS: List[Tuple[str, TokenType]] = sorted(
    [(name, TokenType.VALUE) for name in CONSTANTS] + list(FUNCTIONS.items()),
    key=lambda item: len(item[0]),
    reverse=True,
)

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "!": TokenType.BANG,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
}

FUNCTION_TOKENS = frozenset(FUNCTIONS.values())

_HEX_LITERAL = re.compile(r"0[xX][0-9a-fA-F]+")
_DECIMAL_LITERAL = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r")


class Tokenizer:
    """Produces tokens from an expression, one call at a time."""

    def __init__(
        self,
        source: str,
        params: Optional["ParameterTable"] = None,
        check_fp_exceptions: bool = True,
    ):
        self._source = source
        self._params = params
        self._check_fp_exceptions = check_fp_exceptions
        self.position = 0

    def _is_at_end(self) -> bool:
        return self.position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self.position]

    def next_token(self) -> Token:
        """
        Returns the next non-whitespace token and advances the cursor past it.

        Raises:
            TokenizerError: If the text at the cursor is not a valid token
            RangeError: If a literal is not representable as a finite double
        """
        while _is_whitespace(self._peek()):
            self.position += 1

        start = self.position
        ch = self._peek()

        # Literal
        if _is_digit(ch) or ch == ".":
            return Token(TokenType.VALUE, self._scan_number(), start)

        # Parameter
        if self._params is not None:
            match = self._params.match_prefix(self._source, self.position)
            if match is not None:
                value, length = match
                self.position += length
                return Token(TokenType.VALUE, value, start)

        if self._is_at_end():
            return Token(TokenType.EOF, 0.0, start)

        if ch == "+":
            return self._scan_plus(start)

        if ch in SINGLE_CHAR_TOKENS:
            self.position += 1
            return Token(SINGLE_CHAR_TOKENS[ch], 0.0, start)

        for keyword, token_type in KEYWORDS:
            if self._source.startswith(keyword, self.position):
                self.position += len(keyword)
                value = CONSTANTS.get(keyword, 0.0)
                return Token(token_type, value, start)

        raise TokenizerError(ErrorKind.UNEXPECTED_SYMBOL, self.position, self._source)

    def _scan_plus(self, start: int) -> Token:
        # Consume '+' and any whitespace after it
        self.position += 1
        while _is_whitespace(self._peek()):
            self.position += 1

        # Binary plus directly followed by unary plus is not allowed
        if self._peek() == "+":
            raise TokenizerError(
                ErrorKind.UNEXPECTED_SYMBOL, self.position, self._source
            )

        return Token(TokenType.PLUS, 0.0, start)

    def _scan_number(self) -> float:
        match = _HEX_LITERAL.match(self._source, self.position)
        if match:
            value = guarded(float, int(match.group(0), 16))
        else:
            match = _DECIMAL_LITERAL.match(self._source, self.position)
            if not match:
                raise TokenizerError(
                    ErrorKind.EXPECTED_VALUE, self.position, self._source
                )
            value = float(match.group(0))

        self.position = match.end()

        if self._check_fp_exceptions and is_invalid(value):
            raise RangeError(ErrorKind.VALUE_TOO_BIG, self.position, self._source)

        return value


def tokenize(
    source: str,
    params: Optional["ParameterTable"] = None,
    check_fp_exceptions: bool = True,
) -> List[Token]:
    """
    Tokenizes a whole expression, including the trailing EOF token.

    The evaluator never needs the full list; this is a convenience for
    inspecting how an expression is split.

    Args:
        source: The expression string to tokenize
        params: Optional parameter table consulted before keywords
        check_fp_exceptions: Whether literals must be finite

    Returns:
        List of tokens

    Raises:
        TokenizerError: If the expression contains invalid tokens
    """
    tokenizer = Tokenizer(source, params, check_fp_exceptions)
    tokens: List[Token] = []
    while True:
        token = tokenizer.next_token()
        tokens.append(token)
        if token.type == TokenType.EOF:
            return tokens
