"""
Evaluation configuration.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from matheval.limits import DEFAULT_EVALUATION_LIMITS, EvaluationLimits

ENV_VAR_CHECK_FP_EXCEPTIONS = "MATHEVAL_CHECK_FP_EXCEPTIONS"
ENV_VAR_MAX_EXPRESSION_LENGTH = "MATHEVAL_MAX_EXPRESSION_LENGTH"
ENV_VAR_MAX_BRACKET_DEPTH = "MATHEVAL_MAX_BRACKET_DEPTH"

_FALSE_VALUES = {"0", "false", "no", "off"}


class EvaluationConfig(BaseModel):
    """Configuration applied to every evaluation of a session."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    # Abort on NaN/inf intermediate values (default: True). When disabled,
    # NaN and inf propagate into the result.
    check_fp_exceptions: bool = Field(default=True, alias="checkFpExceptions")

    # Optional embedder limits - can be dict or EvaluationLimits, dicts are
    # converted on validation
    limits: EvaluationLimits | dict[str, Any] | None = Field(default=None)

    @field_validator("limits")
    @classmethod
    def validate_limits(cls, value: Any) -> Any:
        # Support both snake_case and camelCase keys
        if not isinstance(value, dict):
            return value
        try:
            return EvaluationLimits(
                max_expression_length=_optional_int(
                    value.get("max_expression_length", value.get("maxExpressionLength"))
                ),
                max_bracket_depth=_optional_int(
                    value.get("max_bracket_depth", value.get("maxBracketDepth"))
                ),
            )
        except TypeError as e:
            raise ValueError(f"invalid limits: {e}") from e

    def resolve_limits(self) -> EvaluationLimits:
        """Returns the configured limits as an EvaluationLimits instance."""
        if isinstance(self.limits, EvaluationLimits):
            return self.limits
        return DEFAULT_EVALUATION_LIMITS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> EvaluationConfig:
        """
        Builds a configuration from environment variables.

        Environment variables:
            MATHEVAL_CHECK_FP_EXCEPTIONS - "false"/"0"/"no"/"off" disables checking
            MATHEVAL_MAX_EXPRESSION_LENGTH - maximum expression length
            MATHEVAL_MAX_BRACKET_DEPTH - maximum bracket nesting depth
        """
        env = os.environ if environ is None else environ

        check = env.get(ENV_VAR_CHECK_FP_EXCEPTIONS)
        return cls(
            check_fp_exceptions=check is None or check.strip().lower() not in _FALSE_VALUES,
            limits=EvaluationLimits(
                max_expression_length=_optional_int(env.get(ENV_VAR_MAX_EXPRESSION_LENGTH)),
                max_bracket_depth=_optional_int(env.get(ENV_VAR_MAX_BRACKET_DEPTH)),
            ),
        )


DEFAULT_EVALUATION_CONFIG = EvaluationConfig()


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)
