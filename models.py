"""Request and response models for the HTTP surface.

Operands travel as text so that the HTTP layer goes through exactly the
same parser as the command line (no silent JSON number coercion).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from bounds import OperandMode
from calculator import Result, ResultKind
from operators import Operator


class EvaluationRequest(BaseModel):
    """One calculation: ``operand1 operator operand2``.

    ``mode`` falls back to the application's configured mode when omitted.
    Operand and operator text is not length-checked here; the operand
    parser and the operator table report bad input as calculator errors.
    """

    operand1: str = Field(..., description="First operand, base 10")
    operator: str = Field(..., description="Operator token, e.g. \"<<<\"")
    operand2: str = Field(..., description="Second operand, base 10")
    mode: OperandMode | None = None

    @field_validator("operand1", "operand2", mode="before")
    @classmethod
    def operand_is_text(cls, v: object) -> object:
        # Accept JSON integers too, but hand the parser their text form.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class EvaluationResponse(BaseModel):
    expression: str
    value: int | float
    kind: ResultKind
    display: str

    @classmethod
    def from_result(
        cls, operand1: int, operator: str, operand2: int, result: Result
    ) -> EvaluationResponse:
        return cls(
            expression=f"{operand1} {operator} {operand2}",
            value=result.value,
            kind=result.kind,
            display=result.display,
        )


class OperatorInfo(BaseModel):
    token: str
    name: str
    category: str

    @classmethod
    def from_operator(cls, op: Operator) -> OperatorInfo:
        return cls(token=op.token, name=op.description, category=op.category.value)


class ErrorResponse(BaseModel):
    detail: str
