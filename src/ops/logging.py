"""
Logging setup for the face annotator process.

Everything logs through the root logger. The frame loop and engines log at
INFO on state changes only; per-frame detail (decoded boxes, raw attribute
output) is DEBUG.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Library loggers that would otherwise log once per HTTP request
QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(log_path: str, log_level: str, quiet_loggers: Iterable[str] = QUIET_LOGGERS) -> None:
    """Log to `log_path` and stderr at `log_level`, replacing any earlier setup."""
    os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)

    handlers = [logging.FileHandler(log_path), logging.StreamHandler()]
    logging.basicConfig(level=getattr(logging, log_level), format=LOG_FORMAT, handlers=handlers, force=True)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
