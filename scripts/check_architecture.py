#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/copy_cli"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    ui_imports = [
        "import typer",
        "from typer",
        "import rich",
        "from rich",
        "from copy_cli.cli",
        "import copy_cli.cli",
    ]
    for layer in ("application", "adapters", "plugins"):
        for path in (PACKAGE / layer).glob("*.py"):
            _assert_no_imports(path, ui_imports)

    _assert_no_imports(PACKAGE / "api.py", ui_imports)

    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(path, ["import shutil", "from copy_cli.config"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
