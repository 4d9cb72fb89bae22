"""Public copy API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from copy_cli.adapters.discovery import find_source_files
from copy_cli.application.ports import CompletionListener
from copy_cli.application.results import CopyReport, PlannedCopy
from copy_cli.application.use_cases import (
    build_copy_options,
    build_copy_tasks,
    plan_copies,
    prepare_destination,
    run_copy,
)


def find_files(
    source_dirs: Iterable[Path | str], extensions: Iterable[str]
) -> list[Path]:
    """Find files under ``source_dirs`` matching ``extensions``."""
    return find_source_files(source_dirs, extensions)


def copy_files(
    source_paths: Iterable[Path],
    destination_dir: Path,
    target_extension: str,
    overwrite: bool = False,
    concurrency: int = 5,
    on_complete: CompletionListener | None = None,
) -> CopyReport:
    """Copy ``source_paths`` into ``destination_dir`` as ``*.target_extension``.

    The destination is created when missing.
    """
    options = build_copy_options(
        destination_dir=Path(destination_dir),
        target_extension=target_extension,
        overwrite=overwrite,
        concurrency=concurrency,
    )
    prepare_destination(options.destination_dir)
    tasks = build_copy_tasks(source_paths, options.target_extension)
    return run_copy(
        tasks,
        options.destination_dir,
        overwrite=options.overwrite,
        concurrency=options.concurrency,
        on_complete=on_complete,
    )


def preview_copy(
    source_paths: Iterable[Path],
    destination_dir: Path,
    target_extension: str,
    overwrite: bool = False,
) -> tuple[PlannedCopy, ...]:
    """Return the copies :func:`copy_files` would make, writing nothing."""
    options = build_copy_options(
        destination_dir=Path(destination_dir),
        target_extension=target_extension,
        overwrite=overwrite,
    )
    tasks = build_copy_tasks(source_paths, options.target_extension)
    return plan_copies(tasks, options.destination_dir, options.overwrite)


__all__ = ["copy_files", "find_files", "prepare_destination", "preview_copy"]
