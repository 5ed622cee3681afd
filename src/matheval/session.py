"""
Evaluation session.

A session binds an expression, its parameters, and the outcome of the last
operation together:

    with Session("x^2 + 1") as session:
        session.bind_parameter("x", 3)
        if session.evaluate():
            print(session.result)
        else:
            print(session.format_error())
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Tuple

from matheval.config import EvaluationConfig
from matheval.errors import MathEvalError, ParameterError
from matheval.evaluator import EvaluationResult, Evaluator
from matheval.params import ParameterTable

logger = logging.getLogger(__name__)


class Session:
    """An expression together with its parameters, last result and last error."""

    def __init__(self, expression: str, config: Optional[EvaluationConfig] = None):
        self._expression = str(expression)
        self._config = config or EvaluationConfig()
        self._params = ParameterTable()
        self._result = 0.0
        self._error: Optional[MathEvalError] = None
        self._position: Optional[int] = None
        self._closed = False

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def parameters(self) -> ParameterTable:
        return self._params

    @property
    def result(self) -> float:
        """Result of the last evaluation, 0.0 if none ran or it failed."""
        return self._result

    @property
    def last_error(self) -> Optional[MathEvalError]:
        """The error raised by the last operation, if it failed."""
        return self._error

    def bind_parameter(self, name: str, value: float) -> bool:
        """
        Binds a parameter usable in the expression.

        Names are case sensitive, up to 255 ASCII letters and digits, start
        with a letter, and must not be a built-in constant or function name.
        Rebinding a name replaces its value.

        Returns:
            True on success; on failure the error is available from get_error().
            A successful binding leaves the last error in place.
        """
        self._ensure_open()
        try:
            self._params.bind(name, value)
        except ParameterError as error:
            logger.debug(
                "parameter_binding_failed",
                extra={"parameter": name, "error": error.kind.value},
            )
            self._error = error
            return False

        return True

    def bind_parameters(self, bindings: Mapping[str, float]) -> bool:
        """Binds several parameters, stopping at the first invalid name."""
        for name, value in bindings.items():
            if not self.bind_parameter(name, value):
                return False
        return True

    def evaluate(self) -> bool:
        """
        Evaluates the expression with the current parameters.

        Returns:
            True on success; the value is then available from result
        """
        return self.evaluate_result().success

    def evaluate_result(self) -> EvaluationResult:
        """Evaluates the expression and returns the full result."""
        self._ensure_open()

        evaluator = Evaluator(self._expression, self._params, self._config)
        try:
            value = evaluator.evaluate()
        except MathEvalError as error:
            self._result = 0.0
            self._error = error
            self._position = evaluator.position if error.position is None else error.position
            logger.debug(
                "evaluation_failed",
                extra={
                    "expression": self._expression,
                    "error": error.kind.value,
                    "position": self._position,
                },
            )
            return EvaluationResult(
                value=0.0,
                success=False,
                error=error.message,
                error_kind=error.kind,
                position=self._position,
            )

        self._result = value
        self._error = None
        self._position = evaluator.position
        logger.debug(
            "evaluation_succeeded",
            extra={"expression": self._expression, "result": value},
        )
        return EvaluationResult(value=value, success=True)

    def get_error(self) -> Tuple[str, int]:
        """
        Returns the description of the last error and the approximate offset
        in the expression where it was detected.

        The description is empty when no binding or evaluation has failed
        since the last successful evaluation. The offset is 0 when no
        evaluation has run.
        """
        message = self._error.message if self._error is not None else ""
        position = self._position if self._position is not None else 0
        return message, position

    def format_error(self) -> str:
        """
        Returns the error message followed, for evaluation errors, by the
        expression and a caret marking the error offset. Empty if there is
        no error.
        """
        if self._error is None:
            return ""
        return self._error.format_with_context()

    def close(self) -> None:
        """Releases the parameter bindings. The session cannot be used afterwards."""
        self._params.clear()
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise ValueError("session is closed")

    def __enter__(self) -> Session:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def evaluate_expression(
    expression: str,
    parameters: Optional[Mapping[str, float]] = None,
    config: Optional[EvaluationConfig] = None,
) -> EvaluationResult:
    """
    Evaluates an expression in a throwaway session.

    Args:
        expression: The expression to evaluate
        parameters: Optional name to value bindings
        config: Optional evaluation configuration

    Returns:
        The evaluation result; a rejected parameter name is reported as a
        failed result with the binding error
    """
    with Session(expression, config) as session:
        if parameters and not session.bind_parameters(parameters):
            message, position = session.get_error()
            error = session.last_error
            return EvaluationResult(
                value=0.0,
                success=False,
                error=message,
                error_kind=error.kind if error is not None else None,
                position=position,
            )
        return session.evaluate_result()
