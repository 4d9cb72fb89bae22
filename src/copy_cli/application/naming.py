"""Target path naming and collision resolution."""

from __future__ import annotations

from pathlib import Path

from copy_cli.types import ExistsPredicate


def _split_name(name: str, extension: str | None) -> tuple[str, str]:
    if extension and name.endswith(f".{extension}"):
        return name[: -len(extension) - 1], f".{extension}"
    path = Path(name)
    return path.stem, path.suffix


def suffixed_path(base_path: Path, index: int, extension: str | None = None) -> Path:
    """Return ``base_path`` with ``_<index>`` inserted before its extension.

    ``index`` 0 returns the path unchanged. When ``extension`` is given it is
    treated as the full extension, so ``a.tar.gz`` becomes ``a_1.tar.gz``.
    """
    if index == 0:
        return base_path
    stem, suffix = _split_name(base_path.name, extension)
    return base_path.with_name(f"{stem}_{index}{suffix}")


def resolve_target_path(
    base_path: Path,
    exists: ExistsPredicate,
    *,
    extension: str | None = None,
) -> Path:
    """Find the first unused path among ``name.ext``, ``name_1.ext``, ...

    Parameters
    ----------
    base_path : Path
        Initial target path.
    exists : Callable[[Path], bool]
        Predicate reporting whether a candidate is taken.
    extension : str | None, optional
        Target extension without the leading dot.

    Returns
    -------
    Path
        First candidate for which ``exists`` is false.
    """
    index = 0
    candidate = base_path
    while exists(candidate):
        index += 1
        candidate = suffixed_path(base_path, index, extension)
    return candidate
