"""
Tests for the built-in function tables.
"""

import math

import pytest

from matheval import ONE_ARGUMENT_FUNCTIONS, VARIADIC_FUNCTIONS, is_reserved_name
from matheval.builtins import power
from matheval.tokenizer import FUNCTION_TOKENS, TokenType


class TestFunctionTables:
    """Tests for how function tokens are split between the tables."""

    def test_variadic_functions(self):
        assert set(VARIADIC_FUNCTIONS) == {TokenType.MAX, TokenType.MIN, TokenType.AVG}

    def test_every_function_has_one_dispatch(self):
        dispatched = set(ONE_ARGUMENT_FUNCTIONS) | set(VARIADIC_FUNCTIONS) | {
            TokenType.POW,
            TokenType.LOG,
        }
        assert dispatched == set(FUNCTION_TOKENS)
        assert not set(ONE_ARGUMENT_FUNCTIONS) & set(VARIADIC_FUNCTIONS)


class TestVariadicFunctions:
    """Tests for max, min and average over argument lists."""

    @pytest.mark.parametrize(
        "token_type,arguments,expected",
        [
            (TokenType.MAX, [-1.0, 2.0, 3.0], 3.0),
            (TokenType.MIN, [-1.0, 2.0, 3.0], -1.0),
            (TokenType.AVG, [1.0, 2.0, 3.0], 2.0),
            (TokenType.MAX, [4.5], 4.5),
            (TokenType.AVG, [6.2], 6.2),
        ],
    )
    def test_applies_to_arguments(self, token_type, arguments, expected):
        assert VARIADIC_FUNCTIONS[token_type](arguments) == expected

    def test_average_accumulates_in_order(self):
        assert VARIADIC_FUNCTIONS[TokenType.AVG]([0.1, 0.2, 0.3]) == (0.1 + 0.2 + 0.3) / 3


class TestOneArgumentFunctions:
    """Tests for guarded one-argument functions."""

    def test_domain_error_is_nan(self):
        assert math.isnan(ONE_ARGUMENT_FUNCTIONS[TokenType.ASIN](2.0))

    def test_overflow_is_infinity(self):
        assert ONE_ARGUMENT_FUNCTIONS[TokenType.EXP](1000.0) == math.inf

    def test_power(self):
        assert power(2.0, 10.0) == 1024.0
        assert math.isnan(power(-2.0, 0.5))


class TestReservedNames:
    """Tests for reserved name lookup."""

    @pytest.mark.parametrize("name", ["e", "pi", "average", "avg", "fact"])
    def test_reserved(self, name):
        assert is_reserved_name(name)

    @pytest.mark.parametrize("name", ["E", "Pi", "x", "sine"])
    def test_not_reserved(self, name):
        assert not is_reserved_name(name)
