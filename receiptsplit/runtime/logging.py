"""Logging setup for the receiptsplit namespace.

Every module asks for ``get_logger(__name__)``; records go to a single
stderr handler attached to the ``receiptsplit`` logger, which does not
propagate to the root logger.

The level comes from RECEIPTSPLIT_LOG_LEVEL (a level name such as DEBUG or
WARNING), or INFO when unset. ``rs -v`` switches to DEBUG at runtime.
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_NAMESPACE = "receiptsplit"
LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_handler: logging.Handler | None = None


def _level_from_env() -> int:
    name = os.environ.get("RECEIPTSPLIT_LOG_LEVEL", "").strip().upper()
    if name == "WARN":
        name = "WARNING"
    level = logging.getLevelName(name) if name else DEFAULT_LOG_LEVEL
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def _formatter_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | None = None) -> None:
    """Attach the stderr handler once; later calls are no-ops."""
    global _handler

    if _handler is not None:
        return

    if level is None:
        level = _level_from_env()

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(_formatter_for(level))

    package_logger = logging.getLogger(LOG_NAMESPACE)
    package_logger.setLevel(level)
    package_logger.addHandler(_handler)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Module names already inside the package (``receiptsplit.receipt.tokenizer``)
    are used as-is; anything else is nested under the package namespace.
    """
    configure_logging()

    if name == LOG_NAMESPACE or name.startswith(f"{LOG_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOG_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the package log level, switching to the line-number format at DEBUG."""
    configure_logging(level)
    logging.getLogger(LOG_NAMESPACE).setLevel(level)
    if _handler is not None:
        _handler.setFormatter(_formatter_for(level))
