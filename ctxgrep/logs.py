"""
Logging setup: console (stderr) logger + optional rotating file handler.

Window bytes go to the sink (usually stdout); everything diagnostic goes
through the "ctxgrep" logger so the two streams never mix.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def init_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("ctxgrep")
    logger.setLevel(log_level)
    logger.propagate = False  # avoid duplicate logs if root has handlers

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    # Console
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(log_level)
    ch.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(ch)

    # File (rotating)
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5)
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(fh)

    return logger
