"""Logging setup for the labour ledger."""

from __future__ import annotations

import logging
import sys

_LOGGER_PREFIX = "labour_ledger"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the labour_ledger namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the package root logger.

    Safe to call more than once (e.g. one app per test): the handler is only
    added the first time, later calls just update the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(level)
    if not any(getattr(h, "_labour_ledger", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._labour_ledger = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root
