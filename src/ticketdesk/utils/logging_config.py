"""Structured logger setup shared by the Lambda and server entrypoints."""

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Return a JSON logger for ``name``, configuring it on first use.

    Context is passed through ``extra=`` and lands as top-level JSON keys.
    The level defaults to ``LOG_LEVEL`` so the Lambda and the uvicorn
    process are tuned the same way.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel((level or os.environ.get("LOG_LEVEL", "INFO")).upper())
    logger.propagate = False
    return logger
