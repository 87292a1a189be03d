"""Logging setup for prlens.

Console logging goes to stderr so stdout stays reserved for command output
(rendered Markdown, truncated diffs, action lists) that workflows capture.
"""

from __future__ import annotations

import logging
import sys

from prlens.config import LogLevel

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(log_level: LogLevel | str = LogLevel.INFO, *, debug: bool = False) -> logging.Logger:
    """Configure root logging on stderr and return the ``prlens`` logger.

    Debug mode raises the root logger to INFO and the ``prlens`` logger to
    DEBUG regardless of ``log_level``.
    """

    root_level = logging.INFO if debug else logging.WARNING
    prlens_level = logging.DEBUG if debug else _to_logging_level(log_level)

    logging.basicConfig(
        level=root_level,
        stream=sys.__stderr__,
        format=LOG_FORMAT,
        force=True,
    )

    logger = logging.getLogger("prlens")
    logger.setLevel(prlens_level)

    for noisy in _NOISY_LOGGERS:
        noisy_logger = logging.getLogger(noisy)
        noisy_logger.setLevel(logging.WARNING)
        noisy_logger.propagate = False

    return logger


def _to_logging_level(value: LogLevel | str) -> int:
    mapping = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
    }
    if isinstance(value, LogLevel):
        return mapping[value]
    if isinstance(value, str):
        try:
            return mapping[LogLevel(value.lower())]
        except ValueError:
            return logging.WARNING
    return logging.WARNING


__all__ = ["LOG_FORMAT", "configure_logging", "_to_logging_level"]
