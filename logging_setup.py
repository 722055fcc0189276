"""Logging setup shared by the CLI, the API and the calculator core."""

from __future__ import annotations

import logging
import os
import sys

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LEVEL = "WARNING"


def setup_logging(level: str | None = None, force: bool = False) -> None:
    """Configure the root stderr handler once (unless force=True).

    ``level`` falls back to the ``LOG_LEVEL`` environment variable and
    then to WARNING, which keeps the CLI's stderr down to its own error
    line.
    """
    if getattr(setup_logging, "_configured", False) and not force:
        return
    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
    level_name = (level or os.getenv("LOG_LEVEL", DEFAULT_LEVEL)).upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root.addHandler(handler)
    setup_logging._configured = True  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configuration is left to the entry point."""
    return logging.getLogger(name)
