"""Operand validation.

Decides, before any arithmetic happens, whether an operand pair may be
used with an operator.  Rejections raise a ``ValidationFailedError``
subclass whose message is shown to the user verbatim.

Branches: VAL-PASS, VAL-NEG-BITWISE, VAL-DIV-ZERO
"""

from __future__ import annotations

from bounds import OperandMode
from errors import DivisionByZeroError, NegativeBitwiseOperandError
from operators import Operator


def validate_operands(
    operand1: int,
    operand2: int,
    operator: Operator,
    mode: OperandMode = OperandMode.SIGNED,
) -> None:
    if mode is OperandMode.SIGNED and operator.is_bitwise:
        if operand1 < 0 or operand2 < 0:                          # VAL-NEG-BITWISE
            raise NegativeBitwiseOperandError(operator.token)

    if operator.is_division and operand2 == 0:                    # VAL-DIV-ZERO
        raise DivisionByZeroError(operator.token)

    # (falls through) VAL-PASS
