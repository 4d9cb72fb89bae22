"""Application use-cases orchestrating copy runs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from copy_cli.adapters.filesystem import ShutilFileCopier, path_exists
from copy_cli.application.naming import resolve_target_path
from copy_cli.application.options import CopyOptions
from copy_cli.application.ports import CompletionListener, FileCopier
from copy_cli.application.results import (
    Collision,
    CopyOutcome,
    CopyReport,
    CopyStatus,
    CopyTask,
    PlannedCopy,
)
from copy_cli.errors import PreconditionError
from copy_cli.infrastructure.logging_config import VERBOSE
from copy_cli.types import ExistsPredicate

logger = logging.getLogger(__name__)


def build_copy_tasks(
    source_paths: Iterable[Path], target_extension: str
) -> tuple[CopyTask, ...]:
    """Create one task per source path, keeping input order."""
    return tuple(
        CopyTask.from_source(Path(path), target_extension) for path in source_paths
    )


def plan_copies(
    tasks: Sequence[CopyTask],
    destination_dir: Path,
    overwrite: bool,
    *,
    exists: ExistsPredicate | None = None,
) -> tuple[PlannedCopy, ...]:
    """Resolve every task's target path without writing anything.

    Targets claimed earlier in the same run count as taken, so suffixes are
    handed out in input order and never repeat within a run.

    Parameters
    ----------
    tasks : Sequence[CopyTask]
        Tasks in submission order.
    destination_dir : Path
        Directory receiving the copies.
    overwrite : bool
        Whether existing targets are clobbered instead of renamed.
    exists : Callable[[Path], bool] | None, optional
        Existence probe; defaults to the filesystem.

    Returns
    -------
    tuple[PlannedCopy, ...]
        One planned copy per task, in input order.
    """
    probe = exists or path_exists
    claimed: set[Path] = set()

    def taken(candidate: Path) -> bool:
        return candidate in claimed or probe(candidate)

    planned: list[PlannedCopy] = []
    for task in tasks:
        base_path = destination_dir / task.target_name
        if overwrite:
            target = base_path
            collision = Collision.OVERWRITE if taken(base_path) else Collision.NONE
        else:
            target = resolve_target_path(
                base_path, taken, extension=task.target_extension
            )
            collision = Collision.RENAME if target != base_path else Collision.NONE
        claimed.add(target)
        planned.append(PlannedCopy(task=task, target_path=target, collision=collision))
    return tuple(planned)


def _copy_one(planned: PlannedCopy, copier: FileCopier) -> CopyOutcome:
    source = planned.task.source_path
    try:
        copier.copy(source, planned.target_path)
    except Exception as exc:
        logger.error("Error copying file %s: %s", source, exc)
        return CopyOutcome(
            source_path=source,
            target_path=planned.target_path,
            status=CopyStatus.FAILED,
            error_message=str(exc) or type(exc).__name__,
        )
    logger.log(VERBOSE, "Copied: %s -> %s", source, planned.target_path)
    return CopyOutcome(
        source_path=source,
        target_path=planned.target_path,
        status=CopyStatus.SUCCESS,
    )


def _copy_chain(
    chain: Sequence[tuple[int, PlannedCopy]], copier: FileCopier
) -> list[tuple[int, CopyOutcome]]:
    """Copy planned entries sharing one target, one after another."""
    return [(index, _copy_one(planned, copier)) for index, planned in chain]


def _notify(listener: CompletionListener | None, outcome: CopyOutcome) -> None:
    if listener is None:
        return
    try:
        listener(outcome)
    except Exception:
        logger.exception("completion listener failed for %s", outcome.source_path)


def run_copy(
    tasks: Sequence[CopyTask],
    destination_dir: Path,
    *,
    overwrite: bool = False,
    concurrency: int = 5,
    copier: FileCopier | None = None,
    on_complete: CompletionListener | None = None,
    exists: ExistsPredicate | None = None,
) -> CopyReport:
    """Use-case: copy every task into ``destination_dir``.

    At most ``concurrency`` copies run at once. A failing task is recorded in
    the report and never stops its siblings.

    Raises
    ------
    PreconditionError
        If ``concurrency`` is below one or the destination is not a directory.
    """
    if concurrency < 1:
        raise PreconditionError(f"Concurrency must be at least 1, got {concurrency}.")
    if not destination_dir.is_dir():
        raise PreconditionError(
            f"Destination directory does not exist: {destination_dir}"
        )

    tasks = tuple(tasks)
    if not tasks:
        return CopyReport()

    plan = plan_copies(tasks, destination_dir, overwrite, exists=exists)
    copier = copier or ShutilFileCopier()
    logger.info("Starting copy process with concurrency=%d", concurrency)

    # Entries sharing a target (overwrite mode) run in input order on one worker.
    chains: dict[Path, list[tuple[int, PlannedCopy]]] = {}
    for index, planned in enumerate(plan):
        chains.setdefault(planned.target_path, []).append((index, planned))

    settled: dict[int, CopyOutcome] = {}
    with ThreadPoolExecutor(
        max_workers=concurrency, thread_name_prefix="copy-cli"
    ) as pool:
        futures = [pool.submit(_copy_chain, chain, copier) for chain in chains.values()]
        for future in as_completed(futures):
            for index, outcome in future.result():
                settled[index] = outcome
                _notify(on_complete, outcome)

    report = CopyReport.from_outcomes(tuple(settled[index] for index in range(len(plan))))
    logger.info(
        "Copy finished: %d total, %d succeeded, %d failed",
        report.total_files,
        report.succeeded,
        len(report.failed),
    )
    return report


def prepare_destination(destination_dir: Path) -> Path:
    """Create the destination directory if needed.

    Raises
    ------
    PreconditionError
        If the directory cannot be created.
    """
    try:
        destination_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PreconditionError(
            f"Failed to create destination directory: {destination_dir} ({exc})"
        ) from exc
    if not destination_dir.is_dir():
        raise PreconditionError(
            f"Destination is not a directory: {destination_dir}"
        )
    return destination_dir


def build_copy_options(
    *,
    destination_dir: Path,
    target_extension: str,
    overwrite: bool = False,
    concurrency: int = 5,
) -> CopyOptions:
    """Build typed option object from command/API params."""
    return CopyOptions(
        destination_dir=destination_dir,
        target_extension=target_extension.lstrip("."),
        overwrite=overwrite,
        concurrency=concurrency,
    )
