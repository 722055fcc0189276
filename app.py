"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_config
from config import CalculatorConfig
from logging_setup import setup_logging


def create_app(config: CalculatorConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional config for testing; reads the environment if omitted.
    """
    if config is None:
        config = CalculatorConfig.from_env()

    setup_logging(config.log_level)
    set_config(config)

    app = FastAPI(
        title="simplecalc",
        description=(
            "32-bit integer calculator. Evaluates exactly one binary "
            "arithmetic or bitwise operation per request, in signed or "
            "unsigned operand mode."
        ),
        version="1.0.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
