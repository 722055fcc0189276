"""Calculator error types.

Each error subclasses the builtin a caller would naturally catch
(``ValueError``, ``OverflowError``, ``ZeroDivisionError``) and carries a
short ``kind`` string used by the CLI and the HTTP layer.
"""

from __future__ import annotations


class CalculatorError(Exception):
    """Base class for every failure of a single calculation."""

    kind = "calculator_error"


class InvalidOperandError(CalculatorError, ValueError):
    """Raised when an operand token is not a representable integer."""

    kind = "invalid_operand"

    def __init__(self, name: str, token: str, reason: str) -> None:
        self.name = name
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid {name} {token!r}: {reason}")


class ValidationFailedError(CalculatorError, ValueError):
    """Raised when an operand pair is rejected for the requested operator."""

    kind = "validation_failed"

    def __init__(self, operator: str, reason: str) -> None:
        self.operator = operator
        self.reason = reason
        super().__init__(reason)


class NegativeBitwiseOperandError(ValidationFailedError):
    """A negative operand was given to a bitwise operator in signed mode."""

    def __init__(self, operator: str) -> None:
        super().__init__(operator, "bitwise operation requires non-negative operands")


class DivisionByZeroError(ValidationFailedError, ZeroDivisionError):
    """The divisor of ``/`` or ``%`` is zero."""

    kind = "division_by_zero"

    def __init__(self, operator: str) -> None:
        super().__init__(operator, "division/modulo by zero")


class ArithmeticOverflowError(CalculatorError, OverflowError):
    """An exact result does not fit the active integer range."""

    kind = "arithmetic_overflow"

    def __init__(self, value: int, lo: int, hi: int) -> None:
        self.value = value
        self.lo = lo
        self.hi = hi
        super().__init__(f"Result {value} is outside bounds [{lo}, {hi}]")


class UnsupportedOperatorError(CalculatorError, ValueError):
    """The operator token is not one of the supported symbols."""

    kind = "unsupported_operator"

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unsupported operator: {token!r}")
