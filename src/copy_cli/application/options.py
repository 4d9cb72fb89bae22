"""Typed option objects shared across copy use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CopyOptions:
    """Options controlling a single copy run."""

    destination_dir: Path
    target_extension: str
    overwrite: bool = False
    concurrency: int = 5
