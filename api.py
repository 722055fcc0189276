"""FastAPI endpoints for the calculator.

Routes
------
POST   /evaluate     Parse, validate and evaluate one calculation
GET    /operators    List the supported operator tokens
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from calculator import evaluate
from config import CalculatorConfig
from errors import CalculatorError
from logging_setup import get_logger
from models import ErrorResponse, EvaluationRequest, EvaluationResponse, OperatorInfo
from operands import parse_operands
from operators import Operator

logger = get_logger(__name__)

router = APIRouter(tags=["calculator"])

# The configuration is injected by the app factory (see app.py).
_config: CalculatorConfig | None = None


def set_config(config: CalculatorConfig) -> None:
    """Inject the configuration. Called once at app startup."""
    global _config
    _config = config


def get_config() -> CalculatorConfig:
    assert _config is not None, "Config not initialized"
    return _config


def _calculation_error(e: CalculatorError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=str(e),
        headers={"X-Calc-Error": e.kind},
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/evaluate",
    response_model=EvaluationResponse,
    responses={422: {"model": ErrorResponse}},
)
def evaluate_expression(payload: EvaluationRequest) -> EvaluationResponse:
    """Evaluate ``operand1 operator operand2``."""
    mode = payload.mode or get_config().mode
    try:
        operand1, operand2 = parse_operands(payload.operand1, payload.operand2, mode)
        result = evaluate(operand1, payload.operator, operand2, mode)
    except CalculatorError as e:
        logger.info("evaluate failed (%s): %s", e.kind, e)
        raise _calculation_error(e) from e
    return EvaluationResponse.from_result(operand1, payload.operator, operand2, result)


@router.get("/operators", response_model=list[OperatorInfo])
def list_operators() -> list[OperatorInfo]:
    """All supported operators in table order."""
    return [OperatorInfo.from_operator(op) for op in Operator]
