"""32-bit integer calculator.

Every operation validates its inputs against the mode's bounds,
performs the arithmetic exactly (Python ints do not overflow, so the
raw value is the widened intermediate) and then brings the result back
into bounds: signed mode raises on overflow, unsigned mode wraps.

Bitwise operations work on the 32-bit pattern of the operands and read
the result back in the active mode.  Decision branches are annotated
with their branch ids (see ``contract.build_contract``) so white-box
tests can trace coverage.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from bounds import MASK, WIDTH, Bounds, OperandMode, to_unsigned
from errors import CalculatorError, DivisionByZeroError, InvalidOperandError
from logging_setup import get_logger
from operands import parse_operands
from operators import Operator, parse_operator
from validator import validate_operands

logger = get_logger(__name__)

Number = int | float


class ResultKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class Result:
    """The value of one calculation and how to display it."""

    value: Number
    kind: ResultKind

    @property
    def display(self) -> str:
        if self.kind is ResultKind.FLOAT:
            return f"{self.value:.2f}"
        return str(self.value)


# ---------------------------------------------------------------------------
# Rotation on raw 32-bit patterns
# ---------------------------------------------------------------------------

def rotate_left(value: int, count: int) -> int:
    """Rotate the 32-bit pattern of ``value`` left by ``count`` mod 32.

    Branches: ROT-ZERO, ROT-NORMAL
    """
    value &= MASK
    count %= WIDTH
    if count == 0:                                                # ROT-ZERO
        return value
    return ((value << count) | (value >> (WIDTH - count))) & MASK  # ROT-NORMAL


def rotate_right(value: int, count: int) -> int:
    """Rotate the 32-bit pattern of ``value`` right by ``count`` mod 32."""
    value &= MASK
    count %= WIDTH
    if count == 0:
        return value
    return ((value >> count) | (value << (WIDTH - count))) & MASK


def _shift_count(count: int) -> int:
    return count & (WIDTH - 1)                                    # SHIFT-MASK


@dataclass(frozen=True)
class Calculator:
    mode: OperandMode = OperandMode.SIGNED

    @property
    def bounds(self) -> Bounds:
        return self.mode.bounds

    # -- internal helpers ---------------------------------------------------

    def _validate(self, *values: int) -> None:
        """Reject inputs outside the mode's bounds.

        Branches: INPUT-VALID, INPUT-INVALID
        """
        for v in values:
            if not self.bounds.contains(v):                       # INPUT-INVALID
                raise InvalidOperandError(
                    "operand",
                    str(v),
                    f"out of range [{self.bounds.lo}, {self.bounds.hi}]",
                )
        # (falls through) INPUT-VALID

    def _from_pattern(self, pattern: int) -> int:
        return self.mode.from_pattern(pattern)

    # -- arithmetic ---------------------------------------------------------

    def add(self, a: int, b: int) -> int:
        """Addition with overflow handling."""
        self._validate(a, b)
        return self.bounds.apply(a + b)

    def sub(self, a: int, b: int) -> int:
        """Subtraction with overflow handling."""
        self._validate(a, b)
        return self.bounds.apply(a - b)

    def mul(self, a: int, b: int) -> int:
        """Multiplication with overflow handling."""
        self._validate(a, b)
        return self.bounds.apply(a * b)

    def div(self, a: int, b: int) -> float:
        """True quotient as a float; never truncates.

        Branches: DIV-NORMAL, DIV-ZERO
        """
        self._validate(a, b)
        if b == 0:                                                # DIV-ZERO
            raise DivisionByZeroError(Operator.DIV.token)
        return a / b                                              # DIV-NORMAL

    def mod(self, a: int, b: int) -> int:
        """Truncating remainder: the sign follows the dividend.

        Branches: MOD-ZERO, MOD-NEGATIVE-DIVIDEND
        """
        self._validate(a, b)
        if b == 0:                                                # MOD-ZERO
            raise DivisionByZeroError(Operator.MOD.token)
        r = abs(a) % abs(b)
        if a < 0:                                                 # MOD-NEGATIVE-DIVIDEND
            r = -r
        return self.bounds.apply(r)

    # -- bitwise ------------------------------------------------------------

    def shl(self, a: int, b: int) -> int:
        """Logical left shift, truncated to 32 bits."""
        self._validate(a, b)
        return self._from_pattern(to_unsigned(a) << _shift_count(b))

    def shr(self, a: int, b: int) -> int:
        """Logical (zero-filling) right shift."""
        self._validate(a, b)
        return self._from_pattern(to_unsigned(a) >> _shift_count(b))

    def and_(self, a: int, b: int) -> int:
        self._validate(a, b)
        return self._from_pattern(to_unsigned(a) & to_unsigned(b))

    def or_(self, a: int, b: int) -> int:
        self._validate(a, b)
        return self._from_pattern(to_unsigned(a) | to_unsigned(b))

    def xor(self, a: int, b: int) -> int:
        self._validate(a, b)
        return self._from_pattern(to_unsigned(a) ^ to_unsigned(b))

    def rotl(self, a: int, b: int) -> int:
        self._validate(a, b)
        return self._from_pattern(rotate_left(a, b))

    def rotr(self, a: int, b: int) -> int:
        self._validate(a, b)
        return self._from_pattern(rotate_right(a, b))

    # -- dispatch -----------------------------------------------------------

    def operation(self, operator: Operator) -> Callable[[int, int], Number]:
        """Bound method implementing ``operator``."""
        return getattr(self, _DISPATCH[operator])

    def evaluate(self, operand1: int, operator: str | Operator, operand2: int) -> Result:
        """Validate the pair for ``operator`` and compute one result.

        Branches: DISPATCH-UNSUPPORTED
        """
        try:
            if isinstance(operator, Operator):
                op = operator
            else:
                op = parse_operator(operator)                     # DISPATCH-UNSUPPORTED
            validate_operands(operand1, operand2, op, self.mode)
            value = self.operation(op)(operand1, operand2)
        except CalculatorError as e:
            logger.info("rejected %s %s %s: %s", operand1, operator, operand2, e)
            raise
        kind = ResultKind.FLOAT if op is Operator.DIV else ResultKind.INTEGER
        logger.debug(
            "%s %s %s = %r (%s mode)", operand1, op.token, operand2, value, self.mode.value
        )
        return Result(value=value, kind=kind)


_DISPATCH: dict[Operator, str] = {
    Operator.ADD: "add",
    Operator.SUB: "sub",
    Operator.MUL: "mul",
    Operator.DIV: "div",
    Operator.MOD: "mod",
    Operator.SHL: "shl",
    Operator.SHR: "shr",
    Operator.AND: "and_",
    Operator.OR: "or_",
    Operator.XOR: "xor",
    Operator.ROTL: "rotl",
    Operator.ROTR: "rotr",
}


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def evaluate(
    operand1: int,
    operator: str,
    operand2: int,
    mode: OperandMode = OperandMode.SIGNED,
) -> Result:
    """Evaluate ``operand1 operator operand2`` in ``mode``."""
    return Calculator(mode).evaluate(operand1, operator, operand2)


def calculate(
    token1: str,
    operator: str,
    token2: str,
    mode: OperandMode = OperandMode.SIGNED,
) -> Result:
    """Parse two operand tokens and evaluate them."""
    operand1, operand2 = parse_operands(token1, token2, mode)
    return evaluate(operand1, operator, operand2, mode)
