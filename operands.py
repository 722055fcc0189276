"""Operand parsing.

Turns a command-line token into an integer inside the active mode's
bounds.  The whole token must be a base-10 integer: no surrounding
whitespace, no trailing characters, ASCII digits only.  A leading ``+``
is accepted in both modes; a leading ``-`` only in signed mode.
"""

from __future__ import annotations

import re

from bounds import OperandMode
from errors import InvalidOperandError

_SIGNED_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED_RE = re.compile(r"\+?[0-9]+", re.ASCII)

# 2**32 - 1 has ten digits; anything longer is out of range in both modes.
_MAX_DIGITS = 10


def parse_operand(
    token: str,
    mode: OperandMode = OperandMode.SIGNED,
    name: str = "operand",
) -> int:
    """Parse ``token`` as a 32-bit integer of ``mode``.

    Raises ``InvalidOperandError`` (a ``ValueError``) for malformed or
    out-of-range input.  Never prints.
    """
    if not isinstance(token, str):
        raise InvalidOperandError(name, repr(token), "operand must be text")

    if mode is OperandMode.UNSIGNED and token.startswith("-"):
        raise InvalidOperandError(name, token, "negative values are not allowed in unsigned mode")

    pattern = _SIGNED_RE if mode is OperandMode.SIGNED else _UNSIGNED_RE
    if not pattern.fullmatch(token):
        raise InvalidOperandError(name, token, "not a base-10 integer")

    bounds = mode.bounds
    out_of_range = InvalidOperandError(
        name, token, f"out of range [{bounds.lo}, {bounds.hi}]"
    )
    sign = "-" if token[0] == "-" else ""
    digits = token.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        raise out_of_range

    value = int(sign + digits, 10)
    if not bounds.contains(value):
        raise out_of_range
    return value


def parse_operands(
    token1: str,
    token2: str,
    mode: OperandMode = OperandMode.SIGNED,
) -> tuple[int, int]:
    """Parse both operands in order; the first failure wins."""
    return (
        parse_operand(token1, mode, "operand1"),
        parse_operand(token2, mode, "operand2"),
    )
