"""Command-line entry point.

Usage::

    simplecalc [--mode {signed,unsigned}] [--log-level LEVEL] operand1 operator operand2

    simplecalc 5 + 3          # 5 + 3 = 8
    simplecalc 7 / 2          # 7 / 2 = 3.50
    simplecalc -7 % 2         # -7 % 2 = -1
    simplecalc 1 '<<<' 1      # 1 <<< 1 = 2

Options go before the operands.  Everything from the first operand on is
the expression, so a token such as ``-x`` is reported as an invalid
operand rather than an unknown option.

Exit status is 0 on success, 1 on any calculation error and 2 on a
malformed command line.  Errors are a single ``Error: ...`` line on
stderr; nothing is written to stdout in that case.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Sequence

from bounds import OperandMode
from calculator import evaluate
from config import CalculatorConfig
from errors import CalculatorError, UnsupportedOperatorError
from logging_setup import setup_logging
from operands import parse_operands
from operators import operator_table

PROG = "simplecalc"
USAGE = "%(prog)s [-h] [--mode {signed,unsigned}] [--log-level LEVEL] operand1 operator operand2"

_HELP_FLAGS = ("-h", "--help")
_VALUE_FLAGS = ("--mode", "--log-level")


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that lists the operators along with the usage."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        sys.stderr.write(operator_table() + "\n")
        self.exit(2, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Parser for the leading options only; see ``split_argv``."""
    parser = _Parser(
        prog=PROG,
        usage=USAGE,
        description=(
            "Evaluate one 32-bit integer operation.\n\n"
            "positional arguments:\n"
            "  operand1    first operand (base 10)\n"
            "  operator    operator token, quoted where the shell needs it\n"
            "  operand2    second operand (base 10)"
        ),
        epilog=operator_table(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in OperandMode],
        default=None,
        help="operand representation (default: $CALC_MODE or signed)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="logging level (default: $LOG_LEVEL or WARNING)",
    )
    return parser


def split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split ``argv`` into leading options and the expression tokens.

    Options are only recognised before the first operand, so tokens such
    as ``-x`` or ``--`` in the expression reach the operand parser and
    the operator table unchanged.  A leading ``--`` ends the options.
    """
    options: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            i += 1
            break
        if arg in _HELP_FLAGS or arg.startswith(tuple(f + "=" for f in _VALUE_FLAGS)):
            options.append(arg)
            i += 1
        elif arg in _VALUE_FLAGS:
            options.extend(argv[i:i + 2])
            i += 2
        else:
            break
    return options, list(argv[i:])


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    options, expression = split_argv(argv)
    args = parser.parse_args(options)
    if len(expression) != 3:
        parser.error(f"expected operand1 operator operand2, got {len(expression)} argument(s)")
    token1, operator, token2 = expression

    try:
        config = CalculatorConfig.from_env()
    except ValueError as e:
        return _fail(str(e))
    config = config.with_overrides(
        mode=OperandMode(args.mode) if args.mode else None,
        log_level=args.log_level,
    )
    setup_logging(config.log_level)

    try:
        operand1, operand2 = parse_operands(token1, token2, config.mode)
        result = evaluate(operand1, operator, operand2, config.mode)
    except UnsupportedOperatorError as e:
        return _fail(f"{e} (run '{PROG} --help' for the operator list)")
    except CalculatorError as e:
        return _fail(str(e))

    print(f"{operand1} {operator} {operand2} = {result.display}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
