"""Shared pytest configuration, marker assignment and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep logs, .env lookups and language detection inside the test sandbox."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LANG", "en_US.UTF-8")
    monkeypatch.setenv("COPY_CLI_LOG_DIR", str(tmp_path / "logs"))
    for name in (
        "COPY_CLI_CONCURRENCY",
        "COPY_CLI_OVERWRITE",
        "COPY_CLI_LOG_LEVEL",
        "COPY_CLI_PLUGIN_DIR",
        "COPY_CLI_LANG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small source tree with matching, hidden and ignored files."""
    root = tmp_path / "src"
    (root / "nested").mkdir(parents=True)
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / ".hidden").mkdir()
    (root / "a.js").write_text("alpha", encoding="utf-8")
    (root / "b.TS").write_text("bravo", encoding="utf-8")
    (root / "nested" / "c.js").write_text("charlie", encoding="utf-8")
    (root / "nested" / "notes.md").write_text("skip", encoding="utf-8")
    (root / "node_modules" / "pkg" / "dep.js").write_text("dep", encoding="utf-8")
    (root / ".hidden" / "secret.js").write_text("secret", encoding="utf-8")
    (root / ".dotfile.js").write_text("dot", encoding="utf-8")
    return root
