"""Application-layer task and result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class CopyStatus(str, Enum):
    """Settled state of a single copy task."""

    SUCCESS = "success"
    FAILED = "failed"


class Collision(str, Enum):
    """How a target path collision is handled."""

    NONE = "none"
    RENAME = "rename"
    OVERWRITE = "overwrite"


@dataclass(frozen=True)
class CopyTask:
    """One source file to copy under a new extension."""

    source_path: Path
    base_name: str
    target_extension: str

    @classmethod
    def from_source(cls, source_path: Path, target_extension: str) -> CopyTask:
        """Build a task, deriving the base name by stripping the source suffix."""
        return cls(
            source_path=source_path,
            base_name=source_path.stem,
            target_extension=target_extension.lstrip("."),
        )

    @property
    def target_name(self) -> str:
        return f"{self.base_name}.{self.target_extension}"


@dataclass(frozen=True)
class PlannedCopy:
    """Resolved target for a task, before anything is written."""

    task: CopyTask
    target_path: Path
    collision: Collision = Collision.NONE


@dataclass(frozen=True)
class CopyOutcome:
    """Structured result of one copy task."""

    source_path: Path
    target_path: Path
    status: CopyStatus
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is CopyStatus.SUCCESS


@dataclass(frozen=True)
class CopyFailure:
    """Source path and message of a failed copy."""

    source_path: Path
    error_message: str


@dataclass(frozen=True)
class CopyReport:
    """Aggregated outcome of a full run."""

    total_files: int = 0
    succeeded: int = 0
    failed: tuple[CopyFailure, ...] = ()
    outcomes: tuple[CopyOutcome, ...] = field(default=(), repr=False)

    @classmethod
    def from_outcomes(cls, outcomes: tuple[CopyOutcome, ...]) -> CopyReport:
        """Reduce settled outcomes into a report."""
        failed = tuple(
            CopyFailure(outcome.source_path, outcome.error_message or "")
            for outcome in outcomes
            if not outcome.ok
        )
        return cls(
            total_files=len(outcomes),
            succeeded=len(outcomes) - len(failed),
            failed=failed,
            outcomes=outcomes,
        )

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
