"""Unit tests for copy orchestration contracts."""

from __future__ import annotations

import dataclasses
import random
import threading
import time
from pathlib import Path

import pytest

from copy_cli.application.options import CopyOptions
from copy_cli.application.results import Collision, CopyReport, CopyStatus, CopyTask
from copy_cli.application.use_cases import (
    build_copy_options,
    build_copy_tasks,
    plan_copies,
    prepare_destination,
    run_copy,
)
from copy_cli.errors import PreconditionError


class _RecordingCopier:
    """Copier double tracking how many copies run at once."""

    def __init__(self, delay: float = 0.0, jitter: bool = False) -> None:
        self.delay = delay
        self.jitter = jitter
        self.active = 0
        self.max_active = 0
        self.calls: list[tuple[Path, Path]] = []
        self._lock = threading.Lock()

    def copy(self, source_path: Path, target_path: Path) -> None:
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.calls.append((source_path, target_path))
        try:
            pause = self.delay * random.random() if self.jitter else self.delay
            time.sleep(pause)
            target_path.write_bytes(source_path.read_bytes())
        finally:
            with self._lock:
                self.active -= 1


class _FailingCopier:
    def __init__(self, failing: set[str]) -> None:
        self.failing = failing

    def copy(self, source_path: Path, target_path: Path) -> None:
        if source_path.name in self.failing:
            raise PermissionError(f"denied: {source_path.name}")
        target_path.write_bytes(source_path.read_bytes())


def _sources(root: Path, names: list[str]) -> list[Path]:
    paths = []
    for index, name in enumerate(names):
        folder = root / f"dir{index}"
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        path.write_text(f"content-{index}", encoding="utf-8")
        paths.append(path)
    return paths


def test_three_tasks_into_empty_destination(tmp_path: Path) -> None:
    """Copy three files with concurrency 2 and report three successes."""
    dest = tmp_path / "dest"
    dest.mkdir()
    tasks = build_copy_tasks(_sources(tmp_path / "in", ["a.js", "b.js", "c.js"]), "txt")

    report = run_copy(tasks, dest, overwrite=False, concurrency=2)

    assert (report.total_files, report.succeeded, report.failed) == (3, 3, ())
    targets = {outcome.target_path for outcome in report.outcomes}
    assert targets == {dest / "a.txt", dest / "b.txt", dest / "c.txt"}
    assert (dest / "b.txt").read_text(encoding="utf-8") == "content-1"


def test_same_base_name_gets_sequential_suffixes(tmp_path: Path) -> None:
    """Targets mapping to one name get name, name_1, name_2... in input order."""
    dest = tmp_path / "dest"
    dest.mkdir()
    sources = _sources(tmp_path / "in", ["report.md"] * 5)
    tasks = build_copy_tasks(sources, "txt")
    copier = _RecordingCopier(delay=0.01, jitter=True)

    report = run_copy(tasks, dest, overwrite=False, concurrency=4, copier=copier)

    assert report.succeeded == 5
    assert [outcome.target_path.name for outcome in report.outcomes] == [
        "report.txt",
        "report_1.txt",
        "report_2.txt",
        "report_3.txt",
        "report_4.txt",
    ]
    for index, outcome in enumerate(report.outcomes):
        assert outcome.target_path.read_text(encoding="utf-8") == f"content-{index}"


def test_two_tasks_to_report_txt(tmp_path: Path) -> None:
    """Both report.txt and report_1.txt exist and are non-empty."""
    dest = tmp_path / "dest"
    dest.mkdir()
    tasks = build_copy_tasks(_sources(tmp_path / "in", ["report.log", "report.csv"]), "txt")

    run_copy(tasks, dest, overwrite=False, concurrency=2)

    assert (dest / "report.txt").stat().st_size > 0
    assert (dest / "report_1.txt").stat().st_size > 0


def test_existing_files_are_not_clobbered_without_overwrite(tmp_path: Path) -> None:
    """Pre-existing targets are kept and the copy is renamed."""
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "a.txt").write_text("original", encoding="utf-8")
    tasks = build_copy_tasks(_sources(tmp_path / "in", ["a.js"]), "txt")

    report = run_copy(tasks, dest, overwrite=False, concurrency=1)

    assert report.outcomes[0].target_path == dest / "a_1.txt"
    assert (dest / "a.txt").read_text(encoding="utf-8") == "original"


def test_overwrite_last_write_wins(tmp_path: Path) -> None:
    """Copying twice with overwrite leaves only the second content."""
    dest = tmp_path / "dest"
    dest.mkdir()
    first, second = _sources(tmp_path / "in", ["data.csv", "data.csv"])

    run_copy(build_copy_tasks([first], "txt"), dest, overwrite=True, concurrency=1)
    run_copy(build_copy_tasks([second], "txt"), dest, overwrite=True, concurrency=1)

    assert sorted(p.name for p in dest.iterdir()) == ["data.txt"]
    assert (dest / "data.txt").read_text(encoding="utf-8") == "content-1"


def test_overwrite_same_target_in_one_run_keeps_last_source(tmp_path: Path) -> None:
    """Sources sharing a target are copied in input order, never interleaved."""
    dest = tmp_path / "dest"
    dest.mkdir()
    sources = []
    for index in range(6):
        folder = tmp_path / "in" / f"dir{index}"
        folder.mkdir(parents=True)
        path = folder / "big.bin"
        path.write_bytes(bytes([65 + index]) * ((6 - index) * 512 * 1024))
        sources.append(path)

    report = run_copy(
        build_copy_tasks(sources, "txt"), dest, overwrite=True, concurrency=6
    )

    assert report.succeeded == 6
    assert [p.name for p in dest.iterdir()] == ["big.txt"]
    assert (dest / "big.txt").read_bytes() == sources[-1].read_bytes()


def test_overwrite_same_target_is_serialized(tmp_path: Path) -> None:
    """Copies to one target never overlap, while distinct targets still run."""
    dest = tmp_path / "dest"
    dest.mkdir()
    shared = _sources(tmp_path / "in", ["x.js", "x.ts", "x.css"])
    other = _sources(tmp_path / "other", ["y.js"])
    copier = _RecordingCopier(delay=0.02)

    report = run_copy(
        build_copy_tasks([*shared, *other], "txt"),
        dest,
        overwrite=True,
        concurrency=4,
        copier=copier,
    )

    assert report.succeeded == 4
    assert copier.max_active <= 2
    shared_calls = [src for src, target in copier.calls if target.name == "x.txt"]
    assert shared_calls == shared
    assert (dest / "x.txt").read_text(encoding="utf-8") == "content-2"


def test_missing_source_is_recorded_as_failure(tmp_path: Path) -> None:
    """A vanished source yields one failure and no exception."""
    dest = tmp_path / "dest"
    dest.mkdir()
    missing = tmp_path / "nope.js"

    report = run_copy(build_copy_tasks([missing], "txt"), dest, concurrency=1)

    assert report.total_files == 1
    assert report.succeeded == 0
    assert len(report.failed) == 1
    assert report.failed[0].source_path == missing
    assert report.failed[0].error_message
    assert report.outcomes[0].status is CopyStatus.FAILED
    assert report.exit_code == 1


def test_failures_do_not_abort_siblings(tmp_path: Path) -> None:
    """One failing copy is isolated from the others."""
    dest = tmp_path / "dest"
    dest.mkdir()
    sources = _sources(tmp_path / "in", ["a.js", "b.js", "c.js", "d.js"])

    report = run_copy(
        build_copy_tasks(sources, "txt"),
        dest,
        concurrency=2,
        copier=_FailingCopier({"b.js"}),
    )

    assert report.succeeded == 3
    assert [failure.source_path.name for failure in report.failed] == ["b.js"]
    assert "denied: b.js" in report.failed[0].error_message
    assert report.succeeded + len(report.failed) == report.total_files


def test_zero_tasks_returns_empty_report(tmp_path: Path) -> None:
    """An empty run is all zeros."""
    report = run_copy([], tmp_path, concurrency=3)
    assert report == CopyReport()
    assert report.exit_code == 0


@pytest.mark.parametrize("limit", [1, 2, 3])
def test_concurrency_bound_is_respected(tmp_path: Path, limit: int) -> None:
    """Never more than ``limit`` copy bodies run at once."""
    dest = tmp_path / "dest"
    dest.mkdir()
    sources = _sources(tmp_path / "in", [f"f{i}.js" for i in range(10)])
    copier = _RecordingCopier(delay=0.02)

    report = run_copy(build_copy_tasks(sources, "txt"), dest, concurrency=limit, copier=copier)

    assert report.succeeded == 10
    assert 1 <= copier.max_active <= limit


def test_completion_listener_called_once_per_task(tmp_path: Path) -> None:
    """The progress hook sees every settled outcome, even when it raises."""
    dest = tmp_path / "dest"
    dest.mkdir()
    sources = _sources(tmp_path / "in", ["a.js", "b.js", "c.js"])
    seen: list[Path] = []

    def listener(outcome: object) -> None:
        seen.append(outcome.source_path)  # type: ignore[attr-defined]
        raise RuntimeError("listener bug")

    report = run_copy(build_copy_tasks(sources, "txt"), dest, concurrency=2, on_complete=listener)

    assert report.succeeded == 3
    assert sorted(seen) == sorted(sources)


def test_preconditions_raise(tmp_path: Path) -> None:
    """Reject a missing destination and a concurrency below one."""
    tasks = build_copy_tasks([tmp_path / "a.js"], "txt")
    with pytest.raises(PreconditionError, match="does not exist"):
        run_copy(tasks, tmp_path / "missing", concurrency=1)
    with pytest.raises(PreconditionError, match="at least 1"):
        run_copy(tasks, tmp_path, concurrency=0)


def test_plan_matches_run_and_writes_nothing(tmp_path: Path) -> None:
    """Dry-run planning makes the same decisions as the copy step."""
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "a.txt").write_text("old", encoding="utf-8")
    tasks = build_copy_tasks(_sources(tmp_path / "in", ["a.js", "a.py", "b.js"]), "txt")

    plan = plan_copies(tasks, dest, overwrite=False)

    assert [(p.target_path.name, p.collision) for p in plan] == [
        ("a_1.txt", Collision.RENAME),
        ("a_2.txt", Collision.RENAME),
        ("b.txt", Collision.NONE),
    ]
    assert sorted(p.name for p in dest.iterdir()) == ["a.txt"]

    report = run_copy(tasks, dest, overwrite=False, concurrency=2)
    assert [o.target_path for o in report.outcomes] == [p.target_path for p in plan]


def test_plan_with_overwrite_flags_existing_targets(tmp_path: Path) -> None:
    """With overwrite, an existing target is marked for overwrite, not renamed."""
    (tmp_path / "x.txt").write_text("old", encoding="utf-8")
    tasks = (
        CopyTask.from_source(Path("/in/x.js"), ".txt"),
        CopyTask.from_source(Path("/in/y.js"), "txt"),
    )

    plan = plan_copies(tasks, tmp_path, overwrite=True)

    assert [(p.target_path.name, p.collision) for p in plan] == [
        ("x.txt", Collision.OVERWRITE),
        ("y.txt", Collision.NONE),
    ]


def test_plan_uses_injected_exists_predicate() -> None:
    """Resolution is deterministic with a fake filesystem."""
    existing = {Path("/dest/n.txt"), Path("/dest/n_1.txt")}
    tasks = build_copy_tasks([Path("/a/n.js"), Path("/b/n.js")], "txt")

    plan = plan_copies(tasks, Path("/dest"), overwrite=False, exists=existing.__contains__)

    assert [p.target_path.name for p in plan] == ["n_2.txt", "n_3.txt"]


def test_prepare_destination_creates_and_rejects_files(tmp_path: Path) -> None:
    """Create nested destinations; fail when a file is in the way."""
    created = prepare_destination(tmp_path / "a" / "b")
    assert created.is_dir()

    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(PreconditionError):
        prepare_destination(blocker / "child")


def test_build_copy_options_strips_leading_dot(tmp_path: Path) -> None:
    """Normalize the target extension."""
    options = build_copy_options(destination_dir=tmp_path, target_extension=".md")
    assert options.target_extension == "md"
    assert options.concurrency == 5
    assert options.overwrite is False


def test_copy_options_carry_only_copy_settings(tmp_path: Path) -> None:
    """Options hold what the copy step reads; dry-run is routed by the caller."""
    options = build_copy_options(
        destination_dir=tmp_path, target_extension="txt", overwrite=True, concurrency=2
    )
    assert options == CopyOptions(tmp_path, "txt", overwrite=True, concurrency=2)
    assert [field.name for field in dataclasses.fields(CopyOptions)] == [
        "destination_dir",
        "target_extension",
        "overwrite",
        "concurrency",
    ]
