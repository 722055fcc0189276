"""Runtime configuration.

Values come from the environment and can be overridden by CLI flags:

  CALC_MODE   signed | unsigned   (default: signed)
  LOG_LEVEL   DEBUG | INFO | WARNING | ...   (default: WARNING)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from bounds import OperandMode
from logging_setup import DEFAULT_LEVEL

MODE_ENV = "CALC_MODE"
LOG_LEVEL_ENV = "LOG_LEVEL"


def parse_mode(value: str) -> OperandMode:
    """Map a mode name (case-insensitive) to an ``OperandMode``."""
    try:
        return OperandMode(value.strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in OperandMode)
        raise ValueError(f"Unknown mode {value!r}; expected one of: {choices}") from None


@dataclass(frozen=True)
class CalculatorConfig:
    mode: OperandMode = OperandMode.SIGNED
    log_level: str = DEFAULT_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CalculatorConfig:
        env = os.environ if environ is None else environ
        mode = parse_mode(env[MODE_ENV]) if env.get(MODE_ENV) else OperandMode.SIGNED
        log_level = env.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL
        return cls(mode=mode, log_level=log_level.upper())

    def with_overrides(
        self,
        *,
        mode: OperandMode | None = None,
        log_level: str | None = None,
    ) -> CalculatorConfig:
        """Return a copy with the given (non-None) fields replaced."""
        changes: dict = {}
        if mode is not None:
            changes["mode"] = mode
        if log_level is not None:
            changes["log_level"] = log_level.upper()
        return replace(self, **changes) if changes else self
