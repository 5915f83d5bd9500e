from __future__ import annotations

import logging
import sys

from cryptpipe.infra.paths import PACKAGE_NAME

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Route the package's log records to standard error.

    Standard output carries cipher data, so diagnostics never go there.
    Calling this again replaces the previously installed handler.

    Args:
        level: Logging level name such as ``"DEBUG"`` or ``"INFO"``.

    Returns:
        The package logger.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logger = logging.getLogger(PACKAGE_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
    return logger
