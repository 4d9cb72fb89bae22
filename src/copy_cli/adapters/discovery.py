"""Recursive source file discovery by extension."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from copy_cli.errors import PreconditionError

logger = logging.getLogger(__name__)

IGNORED_DIRS = frozenset({"node_modules"})
_SPLIT_RE = re.compile(r"[,;\s]+")
_PATH_SPLIT_RE = re.compile(r"[,;]+")


def split_list(
    raw: str | Iterable[str] | None, *, paths: bool = False
) -> list[str]:
    """Split comma, semicolon or whitespace separated values, dropping blanks.

    With ``paths`` only commas and semicolons separate, so paths may hold spaces.
    """
    pattern = _PATH_SPLIT_RE if paths else _SPLIT_RE
    if raw is None:
        return []
    items = [raw] if isinstance(raw, str) else list(raw)
    parts: list[str] = []
    for item in items:
        parts.extend(part.strip() for part in pattern.split(item))
    return [part for part in parts if part]


def normalize_extensions(extensions: Iterable[str]) -> list[str]:
    """Lower-case extensions and strip leading dots, keeping first-seen order."""
    seen: dict[str, None] = {}
    for ext in extensions:
        cleaned = ext.strip().lstrip(".").lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


def _is_hidden(part: str) -> bool:
    return part.startswith(".") and part not in {".", ".."}


def _walk(root: Path) -> Iterator[Path]:
    for path in root.rglob("*"):
        relative = path.relative_to(root).parts
        if any(_is_hidden(part) or part in IGNORED_DIRS for part in relative):
            continue
        if path.is_file():
            yield path


def _matches(path: Path, extensions: list[str]) -> bool:
    name = path.name.lower()
    return any(name.endswith(f".{ext}") for ext in extensions)


def find_source_files(
    source_dirs: Iterable[Path | str], extensions: Iterable[str]
) -> list[Path]:
    """Find files under ``source_dirs`` whose name ends in one of ``extensions``.

    Matching is case-insensitive. Dotfiles, dot-directories and
    ``node_modules`` are skipped. The result is absolute, deduplicated and
    sorted.

    Parameters
    ----------
    source_dirs : Iterable[Path | str]
        Directories to search recursively.
    extensions : Iterable[str]
        Extensions with or without leading dot.

    Returns
    -------
    list[Path]
        Matching files.

    Raises
    ------
    PreconditionError
        If no directory or extension is given, or a directory cannot be read.
    """
    roots = [Path(item).expanduser().resolve() for item in source_dirs]
    wanted = normalize_extensions(extensions)
    if not roots or not wanted:
        raise PreconditionError(
            "Invalid or empty source directories or extensions provided."
        )

    found: set[Path] = set()
    for root in roots:
        if not root.is_dir():
            logger.warning("Source directory not found, skipping: %s", root)
            continue
        try:
            found.update(path for path in _walk(root) if _matches(path, wanted))
        except OSError as exc:
            raise PreconditionError(f"Error during file search in {root}: {exc}") from exc
    logger.debug("Searched %s for extensions %s", roots, wanted)
    return sorted(found)
