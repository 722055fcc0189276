"""The closed set of operator tokens.

Tokens are matched exactly and case-sensitively through ``OPERATORS``;
there is no other way to obtain an ``Operator``.
"""

from __future__ import annotations

from enum import Enum

from errors import UnsupportedOperatorError


class OperatorClass(str, Enum):
    ARITHMETIC = "arithmetic"
    DIVISION = "division"
    BITWISE = "bitwise"


class Operator(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    SHL = "<<"
    SHR = ">>"
    AND = "&"
    OR = "|"
    XOR = "^"
    ROTL = "<<<"
    ROTR = ">>>"

    @property
    def token(self) -> str:
        return self.value

    @property
    def category(self) -> OperatorClass:
        return _CATEGORIES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_bitwise(self) -> bool:
        return self.category is OperatorClass.BITWISE

    @property
    def is_division(self) -> bool:
        return self.category is OperatorClass.DIVISION


_CATEGORIES = {
    Operator.ADD: OperatorClass.ARITHMETIC,
    Operator.SUB: OperatorClass.ARITHMETIC,
    Operator.MUL: OperatorClass.ARITHMETIC,
    Operator.DIV: OperatorClass.DIVISION,
    Operator.MOD: OperatorClass.DIVISION,
    Operator.SHL: OperatorClass.BITWISE,
    Operator.SHR: OperatorClass.BITWISE,
    Operator.AND: OperatorClass.BITWISE,
    Operator.OR: OperatorClass.BITWISE,
    Operator.XOR: OperatorClass.BITWISE,
    Operator.ROTL: OperatorClass.BITWISE,
    Operator.ROTR: OperatorClass.BITWISE,
}

_DESCRIPTIONS = {
    Operator.ADD: "addition",
    Operator.SUB: "subtraction",
    Operator.MUL: "multiplication",
    Operator.DIV: "divide",
    Operator.MOD: "modulo",
    Operator.SHL: "left shift",
    Operator.SHR: "right shift",
    Operator.AND: "and",
    Operator.OR: "or",
    Operator.XOR: "xor",
    Operator.ROTL: "rotate left",
    Operator.ROTR: "rotate right",
}

OPERATORS: dict[str, Operator] = {op.value: op for op in Operator}


def parse_operator(token: str) -> Operator:
    """Look up an operator token, raising ``UnsupportedOperatorError``."""
    try:
        return OPERATORS[token]
    except (KeyError, TypeError):
        raise UnsupportedOperatorError(token) from None


def operator_table() -> str:
    """Human-readable list of supported operators, one per line."""
    lines = ["Supported Operators:"]
    for op in Operator:
        lines.append(f"({op.token}) {op.description}")
    return "\n".join(lines)
