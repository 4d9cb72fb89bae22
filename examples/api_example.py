#!/usr/bin/env python3
"""Use the copy API directly, without the CLI."""

from __future__ import annotations

import sys
from pathlib import Path

from copy_cli import copy_files, find_files, preview_copy


def main(source: str, destination: str) -> int:
    files = find_files([source], ["py"])
    dest = Path(destination)

    for planned in preview_copy(files, dest, "txt"):
        print(f"{planned.task.source_path} -> {planned.target_path} ({planned.collision.value})")

    report = copy_files(files, dest, "txt", concurrency=4)
    for failure in report.failed:
        print(f"FAILED {failure.source_path}: {failure.error_message}", file=sys.stderr)
    print(f"{report.succeeded}/{report.total_files} copied")
    return report.exit_code


if __name__ == "__main__":
    if len(sys.argv) != 3:
        raise SystemExit("usage: api_example.py SOURCE_DIR DEST_DIR")
    raise SystemExit(main(sys.argv[1], sys.argv[2]))
