"""
eeval - command line front end.

Evaluates the expression given as the last argument and prints the result
with a fixed number of decimals, or the error, the expression and a caret
under the position where the error was detected.

Environment variables:
    MATHEVAL_LOG_LEVEL - Log level (debug, info, warning, error)
    MATHEVAL_CHECK_FP_EXCEPTIONS - set to "false" to let NaN/inf through
    MATHEVAL_MAX_EXPRESSION_LENGTH - Maximum expression length
    MATHEVAL_MAX_BRACKET_DEPTH - Maximum bracket nesting depth

Usage:
    eeval '2^-1/3 + 1'
    eeval -p 6 'log(2, 10)'
    eeval --param x=3 --params params.yaml 'x^2 + y'
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Sequence

import yaml

from matheval.config import EvaluationConfig
from matheval.session import Session

ENV_VAR_LOG_LEVEL = "MATHEVAL_LOG_LEVEL"

DEFAULT_PRECISION = 3
MAX_PRECISION = 20

logger = logging.getLogger(__name__)

USAGE = """
usage:

eeval [-p prec] [--param name=value ...] [--params file] 'expr'

where expr is the expression to evaluate
and optional prec is the number of decimal digits
to be printed in the output (between 0 and 20 included)

when invoked from the shell it's recommended
to place the expression between 'single' quotes

if invoked without parameters usage info is printed

parameters can be bound with --param name=value (repeatable)
or loaded from a YAML or JSON file mapping names to numbers
with --params file

supported operators are:

+ plus
- minus
* multiplication
/ division
^ exponentiation
! factorial (using Gamma function)

supported functions are:

sin(r)  sine
cos(r)  cosine
tan(r)  tangent
asin(n) arcsin
acos(n) arccos
atan(n) arctan
fact(n) factorial of n; equivalent to n!
exp(n) equivalent to e^n
pow(b, n) equivalent to b^n
log(n) natural logarithm of n (base e)
log(b, n) logarithm of n with base b
max(n1, n2, n3, ...) maximum of one or more numbers
min(n1, n2, n3, ...) minimum of one or more numbers
average(n1, n2, ...) average of one or more numbers
avg(n1, n2, ...) abbreviated form of the above

numbers can be expressed as follows:

0.123  or  .123  or  12.3E-2  or  0xff  etc..

recognized constants are:

e  euler number
pi Pi

use round brackets to nest expressions
whitespace, tabs and newlines are ignored
"""


class CliError(Exception):
    """Invalid command line options."""


class _ArgumentParser(argparse.ArgumentParser):
    """Reports option errors as CliError instead of exiting."""

    def error(self, message: str):
        raise CliError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="eeval", usage=USAGE, add_help=False)
    parser.add_argument("-p", dest="precision", default=str(DEFAULT_PRECISION))
    parser.add_argument("--param", dest="params", action="append", default=[])
    parser.add_argument("--params", dest="params_file", default=None)
    return parser


def parse_precision(value: str) -> int:
    """Parses the -p option value."""
    try:
        precision = int(value)
    except ValueError:
        raise CliError("value specified for precision parameter is not an integer number")

    if precision < 0 or precision > MAX_PRECISION:
        raise CliError(
            "value specified for precision parameter must be between 0 and 20 (included)"
        )
    return precision


def parse_param_option(option: str) -> tuple[str, float]:
    """Parses a --param name=value option."""
    name, separator, value = option.partition("=")
    if not separator:
        raise CliError(f"parameter '{option}' must be given as name=value")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise CliError(f"value of parameter '{name.strip()}' is not a number")


def load_parameters_file(file_path: Path) -> dict[str, float]:
    """Load parameter bindings from a YAML or JSON file."""
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise CliError(f"cannot read parameters file '{file_path}': {e}")

    try:
        if file_path.suffix.lower() == ".json":
            data: Any = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CliError(f"cannot parse parameters file '{file_path}': {e}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise CliError(f"parameters file '{file_path}' must contain a mapping")

    params: dict[str, float] = {}
    for name, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CliError(f"value of parameter '{name}' is not a number")
        params[str(name)] = float(value)

    logger.debug("parameters_loaded", extra={"path": str(file_path), "count": len(params)})
    return params


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for eeval."""
    args = list(sys.argv[1:] if argv is None else argv)

    level_name = os.getenv(ENV_VAR_LOG_LEVEL, "warning").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING))

    if not args or args[-1] in ("-h", "--help"):
        print(USAGE, file=sys.stderr)
        return 1

    # The expression is always the last argument, so expressions starting
    # with '-' are never mistaken for options
    expression = args[-1]

    try:
        options = _build_parser().parse_args(args[:-1])
        precision = parse_precision(options.precision)

        bindings: dict[str, float] = {}
        if options.params_file:
            bindings.update(load_parameters_file(Path(options.params_file)))
        for option in options.params:
            name, value = parse_param_option(option)
            bindings[name] = value
    except CliError as e:
        print(str(e), file=sys.stderr)
        return 1

    with Session(expression, EvaluationConfig.from_env()) as session:
        if not session.bind_parameters(bindings):
            message, _ = session.get_error()
            print(message, file=sys.stderr)
            return 1

        if not session.evaluate():
            print(session.format_error(), file=sys.stderr)
            return 1

        print(f"{session.result:.{precision}f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
