"""Logging setup shared by the API server and the command line."""

from __future__ import annotations

import logging
import os
from typing import Iterable

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%H:%M:%S"

LOG_LEVEL_ENV = "ROYALE_LOG_LEVEL"

# Server loggers that follow the application level
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

BACKEND_LOGGER = "royale.backend"


def resolve_level(level: str | None = None) -> str:
    """Explicit level, else ``ROYALE_LOG_LEVEL``, else INFO."""
    return (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()


def configure_logging(
    *,
    level: str | None = None,
    include_uvicorn: bool = True,
    extra_loggers: Iterable[str] = (),
) -> logging.Logger:
    """Install the root handler and align named loggers to one level.

    Returns:
        The backend logger
    """
    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    names = [BACKEND_LOGGER, *extra_loggers]
    if include_uvicorn:
        names.extend(UVICORN_LOGGERS)
    for name in names:
        logging.getLogger(name).setLevel(resolved)

    backend_logger = logging.getLogger(BACKEND_LOGGER)
    backend_logger.debug(f"Log level set to {resolved} for {len(names)} loggers")
    return backend_logger
