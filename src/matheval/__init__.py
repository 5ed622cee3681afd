"""
Arithmetic expression evaluator.

Evaluates expressions such as "2^-1/3 + max(x, pi) * 4!" to a float, or
reports an error together with the offset where it was detected.
"""

from .builtins import (
    ONE_ARGUMENT_FUNCTIONS,
    RESERVED_NAMES,
    VARIADIC_FUNCTIONS,
    is_reserved_name,
)
from .config import DEFAULT_EVALUATION_CONFIG, EvaluationConfig
from .errors import (
    ERROR_MESSAGES,
    DomainError,
    ErrorKind,
    LimitExceededError,
    MathEvalError,
    ParameterError,
    ParseError,
    RangeError,
    TokenizerError,
)

# Evaluator
from .evaluator import (
    EvaluationResult,
    Evaluator,
    evaluate,
)
from .limits import (
    DEFAULT_EVALUATION_LIMITS,
    EvaluationLimits,
    check_bracket_depth,
    check_expression_length,
)

# Parameters
from .params import (
    MAX_PARAMETER_NAME_LENGTH,
    ParameterTable,
    validate_parameter_name,
)
from .policy import is_invalid

# Session
from .session import (
    Session,
    evaluate_expression,
)

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)

__all__ = [
    # Errors
    "ErrorKind",
    "ERROR_MESSAGES",
    "MathEvalError",
    "TokenizerError",
    "ParseError",
    "DomainError",
    "RangeError",
    "ParameterError",
    "LimitExceededError",
    # Policy
    "is_invalid",
    # Limits
    "EvaluationLimits",
    "DEFAULT_EVALUATION_LIMITS",
    "check_expression_length",
    "check_bracket_depth",
    # Config
    "EvaluationConfig",
    "DEFAULT_EVALUATION_CONFIG",
    # Builtins
    "ONE_ARGUMENT_FUNCTIONS",
    "VARIADIC_FUNCTIONS",
    "RESERVED_NAMES",
    "is_reserved_name",
    # Parameters
    "ParameterTable",
    "MAX_PARAMETER_NAME_LENGTH",
    "validate_parameter_name",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Evaluator
    "EvaluationResult",
    "Evaluator",
    "evaluate",
    # Session
    "Session",
    "evaluate_expression",
]
