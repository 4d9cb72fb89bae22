"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from copy_cli.application.results import CopyOutcome


class FileCopier(Protocol):
    """Copy file content from one path to another."""

    def copy(self, source_path: Path, target_path: Path) -> None:
        """Copy bytes exactly, raising ``OSError`` on failure."""


class CompletionListener(Protocol):
    """Receive one notification per settled copy task."""

    def __call__(self, outcome: CopyOutcome) -> None:
        """Handle a settled outcome."""
