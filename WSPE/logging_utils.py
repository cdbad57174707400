from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LEVEL = logging.WARNING


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-scoped logger.

    Handlers live on the package root logger ("WSPE") only, so module
    loggers ("WSPE.SPM.pipeline", ...) propagate to a single stderr handler.
    """

    root = logging.getLogger("WSPE")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(DEFAULT_LEVEL)

    return logging.getLogger(name or "WSPE")


def set_verbosity(verbose: int) -> None:
    """Map a -v count onto the package log level (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = DEFAULT_LEVEL
    get_logger().setLevel(level)
