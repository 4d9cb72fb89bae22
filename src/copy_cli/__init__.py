"""Top-level API for copying files by extension."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from copy_cli.application.ports import CompletionListener
from copy_cli.application.results import CopyReport, PlannedCopy

__version__ = "1.0.0"


def copy_files(
    source_paths: Iterable[Path],
    destination_dir: Path,
    target_extension: str,
    *,
    overwrite: bool = False,
    concurrency: int = 5,
    on_complete: CompletionListener | None = None,
) -> CopyReport:
    """Copy files into a destination directory under a new extension.

    Parameters
    ----------
    source_paths : Iterable[Path]
        Absolute source file paths, in submission order.
    destination_dir : Path
        Target directory; created when missing.
    target_extension : str
        Extension given to every copy, with or without leading dot.
    overwrite : bool, default=False
        Clobber existing targets instead of adding ``_1``, ``_2``... suffixes.
    concurrency : int, default=5
        Maximum number of copies in flight.
    on_complete : Callable[[CopyOutcome], None], optional
        Called once per settled copy.

    Returns
    -------
    CopyReport
        Totals and failures of the run.
    """
    from .api import copy_files as _impl

    return _impl(
        source_paths=source_paths,
        destination_dir=destination_dir,
        target_extension=target_extension,
        overwrite=overwrite,
        concurrency=concurrency,
        on_complete=on_complete,
    )


def preview_copy(
    source_paths: Iterable[Path],
    destination_dir: Path,
    target_extension: str,
    *,
    overwrite: bool = False,
) -> tuple[PlannedCopy, ...]:
    """Plan copies without writing anything (dry run)."""
    from .api import preview_copy as _impl

    return _impl(
        source_paths=source_paths,
        destination_dir=destination_dir,
        target_extension=target_extension,
        overwrite=overwrite,
    )


def find_files(
    source_dirs: Iterable[Path | str], extensions: Iterable[str]
) -> list[Path]:
    """Find files under ``source_dirs`` whose extension is in ``extensions``."""
    from .api import find_files as _impl

    return _impl(source_dirs, extensions)


__all__ = [
    "__version__",
    "copy_files",
    "find_files",
    "preview_copy",
]
