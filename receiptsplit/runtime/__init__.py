"""Runtime infrastructure for receiptsplit.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Receipt grammar loading via load_receipt_grammar()

The upload server lives in receiptsplit.runtime.receipt_server and is
imported on demand.

Usage:
    from receiptsplit.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.receipt_rules)
"""

from receiptsplit.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from receiptsplit.runtime.paths import ProjectPaths, get_paths, reset_paths
from receiptsplit.runtime.receipt_rules import load_receipt_grammar

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_receipt_grammar",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
