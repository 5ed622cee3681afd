"""
Tests for evaluation sessions.
"""

import math

import pytest

from matheval import (
    ErrorKind,
    EvaluationConfig,
    ParameterError,
    ParseError,
    Session,
    evaluate_expression,
)


class TestLifecycle:
    """Tests for the session lifecycle."""

    def test_initial_state(self):
        session = Session("1+1")
        assert session.result == 0.0
        assert session.get_error() == ("", 0)
        assert session.last_error is None
        assert session.format_error() == ""

    def test_expression_is_copied(self):
        session = Session("2*3")
        assert session.expression == "2*3"
        assert len(session.parameters) == 0

    def test_evaluate_sets_result(self):
        session = Session("2+3")
        assert session.evaluate() is True
        assert session.result == 5
        assert session.get_error() == ("", 0)

    def test_evaluate_is_idempotent(self):
        session = Session("sin(pi/7)*3!")
        assert session.evaluate()
        first = session.result
        assert session.evaluate()
        assert session.result == first

    def test_close_rejects_further_use(self):
        session = Session("x")
        session.bind_parameter("x", 1)
        session.close()
        assert len(session.parameters) == 0
        with pytest.raises(ValueError):
            session.evaluate()
        with pytest.raises(ValueError):
            session.bind_parameter("y", 2)

    def test_context_manager_releases_bindings(self):
        with Session("x+1") as session:
            session.bind_parameter("x", 1)
            assert session.evaluate()
            assert session.result == 2
        assert len(session.parameters) == 0
        with pytest.raises(ValueError):
            session.evaluate()


class TestParameters:
    """Tests for binding parameters through a session."""

    def test_bound_parameter_is_used(self):
        session = Session("x^2")
        assert session.bind_parameter("x", 5)
        assert session.evaluate()
        assert session.result == 25

    def test_rebinding_replaces_value(self):
        session = Session("x^2")
        session.bind_parameter("x", 5)
        session.bind_parameter("x", 3)
        assert session.evaluate()
        assert session.result == 9

    def test_reserved_name_is_rejected(self):
        session = Session("pi")
        assert session.bind_parameter("pi", 3) is False
        message, _ = session.get_error()
        assert message == "parameter name is a reserved keyword"
        assert isinstance(session.last_error, ParameterError)
        assert session.format_error() == "parameter name is a reserved keyword"

    def test_successful_binding_keeps_binding_error(self):
        session = Session("x")
        session.bind_parameter("", 1)
        assert session.get_error()[0] == "parameter name is empty"
        assert session.bind_parameter("x", 1)
        assert session.get_error()[0] == "parameter name is empty"
        assert session.evaluate()
        assert session.get_error() == ("", 1)

    def test_successful_binding_keeps_evaluation_error(self):
        session = Session("1/0")
        assert not session.evaluate()
        assert session.bind_parameter("x", 1)
        assert session.get_error() == ("division by zero", 3)
        assert session.format_error() == "division by zero\n1/0\n   ^"

    def test_bind_parameters_stops_at_first_invalid_name(self):
        session = Session("a+b")
        assert session.bind_parameters({"a": 1, "1b": 2, "c": 3}) is False
        assert session.last_error.kind == ErrorKind.INVALID_PARAMETER_NAME
        assert list(session.parameters) == ["a"]

    def test_names_are_case_sensitive(self):
        session = Session("X+x")
        session.bind_parameters({"x": 1, "X": 10})
        assert session.evaluate()
        assert session.result == 11

    def test_parameter_changes_between_evaluations(self):
        session = Session("2*rate")
        session.bind_parameter("rate", 1.5)
        assert session.evaluate()
        assert session.result == 3
        session.bind_parameter("rate", 4)
        assert session.evaluate()
        assert session.result == 8


class TestErrors:
    """Tests for error reporting."""

    def test_failure_resets_result(self):
        session = Session("x/y")
        session.bind_parameters({"x": 1, "y": 2})
        assert session.evaluate()
        assert session.result == 0.5
        session.bind_parameter("y", 0)
        assert session.evaluate() is False
        assert session.result == 0.0
        assert session.get_error() == ("division by zero", 3)

    def test_last_error_is_the_raised_exception(self):
        session = Session("1+2)*3")
        assert not session.evaluate()
        assert isinstance(session.last_error, ParseError)
        assert session.last_error.kind == ErrorKind.UNEXPECTED_CLOSE_BRACKET

    def test_format_error_marks_position(self):
        session = Session("1+2)*3")
        session.evaluate()
        assert session.format_error() == "unexpected close round bracket\n1+2)*3\n    ^"

    def test_success_after_failure_clears_error(self):
        session = Session("x")
        assert not session.evaluate()
        session.bind_parameter("x", 7)
        assert session.evaluate()
        assert session.get_error()[0] == ""
        assert session.last_error is None

    def test_evaluate_result_reports_kind(self):
        result = Session("(-1)!").evaluate_result()
        assert not result.success
        assert result.error_kind == ErrorKind.NEGATIVE_FACTORIAL
        assert result.error == "attempt to evaluate factorial of negative number"

    def test_config_is_applied(self):
        session = Session("9^9^9", EvaluationConfig(check_fp_exceptions=False))
        assert session.evaluate()
        assert session.result == math.inf


class TestEvaluateExpression:
    """Tests for the one-shot convenience function."""

    def test_plain_expression(self):
        result = evaluate_expression("2^-1/3+1")
        assert result.success
        assert result.value == pytest.approx(0.5 / 3 + 1)

    def test_with_parameters(self):
        result = evaluate_expression("max(a, b, c)", {"a": 1, "b": 7, "c": 3})
        assert result.success
        assert result.value == 7

    def test_rejected_parameter(self):
        result = evaluate_expression("e", {"e": 1})
        assert not result.success
        assert result.error_kind == ErrorKind.RESERVED_PARAMETER_NAME
        assert result.value == 0.0

    def test_whitespace_does_not_change_result(self):
        assert (
            evaluate_expression(" 1 +\t2 * 3 ").value
            == evaluate_expression("1+2*3").value
        )
