"""Shared type aliases for copy-cli modules."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeAlias

ExistsPredicate: TypeAlias = Callable[[Path], bool]
TranslateFn: TypeAlias = Callable[..., str]
RunArguments: TypeAlias = Mapping[str, Any]
