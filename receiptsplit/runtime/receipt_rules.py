"""Runtime loader for receipt grammar overrides."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from receiptsplit.receipt.grammar import ReceiptGrammar, build_receipt_grammar
from receiptsplit.runtime.logging import get_logger
from receiptsplit.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    logger.debug("Loaded receipt rules from %s", path)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_receipt_grammar(rule_paths: tuple[str, ...] | None = None) -> ReceiptGrammar:
    """
    Build the receipt grammar from built-in defaults plus TOML layers.

    Args:
        rule_paths: Optional TOML paths, applied in order. If None, uses the
            project-level config/receipt_rules.toml.

    Raises:
        tomllib.TOMLDecodeError: if a rules file is not valid TOML.
    """
    if rule_paths is None:
        rule_files = [get_paths().receipt_rules]
    else:
        rule_files = [Path(path) for path in rule_paths]

    configs = tuple(_load_toml(path) for path in rule_files)
    return build_receipt_grammar(configs)
