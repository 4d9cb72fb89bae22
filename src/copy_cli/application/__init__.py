"""Application-layer use-cases, tasks and result objects."""

from __future__ import annotations

from copy_cli.application.naming import resolve_target_path, suffixed_path
from copy_cli.application.options import CopyOptions
from copy_cli.application.results import (
    Collision,
    CopyFailure,
    CopyOutcome,
    CopyReport,
    CopyStatus,
    CopyTask,
    PlannedCopy,
)
from copy_cli.application.use_cases import (
    build_copy_options,
    build_copy_tasks,
    plan_copies,
    prepare_destination,
    run_copy,
)

__all__ = [
    "Collision",
    "CopyFailure",
    "CopyOptions",
    "CopyOutcome",
    "CopyReport",
    "CopyStatus",
    "CopyTask",
    "PlannedCopy",
    "build_copy_options",
    "build_copy_tasks",
    "plan_copies",
    "prepare_destination",
    "resolve_target_path",
    "run_copy",
    "suffixed_path",
]
