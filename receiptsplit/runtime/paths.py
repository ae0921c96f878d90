"""Centralized path management for receiptsplit.

This module provides a single source of truth for configuration and
upload paths, so the CLI and the upload server resolve them the same way.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory."""
    env_root = os.environ.get("RECEIPTSPLIT_HOME")
    if env_root:
        return Path(env_root).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root, which defaults to
    $RECEIPTSPLIT_HOME or the current working directory.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def receipt_rules(self) -> Path:
        """Project-level receipt grammar overrides."""
        return self.config / "receipt_rules.toml"

    # --- Receipt paths ---
    @property
    def receipts(self) -> Path:
        """Directory where uploaded receipt PDFs are kept."""
        return self.root / "receipts"

    def ensure_receipt_directories(self) -> None:
        """Create receipt directories if they don't exist."""
        self.receipts.mkdir(parents=True, exist_ok=True)


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths(root: Path | None = None) -> ProjectPaths:
    """Replace the singleton, optionally pinning a new project root."""
    global _paths
    _paths = ProjectPaths(root=root) if root is not None else ProjectPaths()
    return _paths
