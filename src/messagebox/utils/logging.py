"""Logging helpers for messagebox."""

from __future__ import annotations

import logging
import time
from typing import Any

ROOT_LOGGER_NAME = "messagebox"


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def time_call(name: str, logger: logging.Logger, *, threshold_ms: int = 50, **fields: Any):
    """
    Context manager logging how long the wrapped block took.

    Durations at or above ``threshold_ms`` are logged as warnings, everything
    else at debug level. Extra keyword arguments are attached to the record.
    """

    start = time.monotonic()

    class Timer:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            elapsed_ms = (time.monotonic() - start) * 1000
            level = logging.WARNING if elapsed_ms >= threshold_ms else logging.DEBUG
            extra = dict(fields, elapsed_ms=elapsed_ms)
            logger.log(level, "%s took %.2fms", name, elapsed_ms, extra=extra)

    return Timer()
