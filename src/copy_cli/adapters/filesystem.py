"""Filesystem adapter implementations."""

from __future__ import annotations

import os
import shutil
from pathlib import Path


def path_exists(path: Path) -> bool:
    """Return whether anything (file, directory or dangling link) is at ``path``."""
    return os.path.lexists(path)


class ShutilFileCopier:
    """Copy file bytes with :func:`shutil.copyfile`."""

    def copy(self, source_path: Path, target_path: Path) -> None:
        """Copy ``source_path`` content to ``target_path``, replacing it if present.

        Raises
        ------
        OSError
            If the source is missing or unreadable, or the target is not writable.
        """
        shutil.copyfile(source_path, target_path)
