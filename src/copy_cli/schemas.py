"""Pydantic schemas for runtime validation of copy inputs."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from copy_cli.adapters.discovery import normalize_extensions, split_list

EXTENSION_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def _as_list(value: object, *, paths: bool = False) -> object:
    if isinstance(value, (str, list, tuple)) and all(
        isinstance(item, str) for item in ([value] if isinstance(value, str) else value)
    ):
        return split_list(value, paths=paths)
    return value


class ConfigFileModel(BaseModel):
    """Options read from a JSON ``--config`` file.

    Keys may use the CLI spelling (``target-ext``, ``dry-run``) or the
    camelCase/snake_case variants.
    """

    model_config = ConfigDict(extra="forbid")

    src: list[str] | None = None
    ext: list[str] | None = None
    target_ext: str | None = Field(
        default=None,
        validation_alias=AliasChoices("target_ext", "targetExt", "target-ext"),
    )
    dest: Path | None = None
    overwrite: bool | None = None
    dry_run: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("dry_run", "dryRun", "dry-run"),
    )
    concurrency: int | None = Field(default=None, ge=1)
    log_level: str | None = Field(
        default=None,
        validation_alias=AliasChoices("log_level", "logLevel", "log-level"),
    )
    lang: str | None = None
    plugin_modules: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("plugin_modules", "pluginModules", "plugins"),
    )

    @field_validator("src", mode="before")
    @classmethod
    def _split_sources(cls, value: object) -> object:
        return _as_list(value, paths=True)

    @field_validator("ext", mode="before")
    @classmethod
    def _split_extensions(cls, value: object) -> object:
        return _as_list(value)


class CopyRunConfig(BaseModel):
    """Validated, fully merged parameters of one copy run."""

    model_config = ConfigDict(extra="forbid")

    sources: list[str] = Field(min_length=1)
    extensions: list[str] = Field(min_length=1)
    target_extension: str
    destination: Path
    overwrite: bool = False
    dry_run: bool = False
    concurrency: int = Field(default=5, ge=1)

    @field_validator("sources", mode="before")
    @classmethod
    def _split_sources(cls, value: object) -> object:
        return _as_list(value, paths=True)

    @field_validator("extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: object) -> object:
        items = _as_list(value)
        if not isinstance(items, list):
            return items
        bad = [item for item in items if not EXTENSION_RE.match(item)]
        if bad:
            raise ValueError(f"Contains invalid characters: {', '.join(bad)}")
        return normalize_extensions(items)

    @field_validator("target_extension")
    @classmethod
    def _validate_target_extension(cls, value: str) -> str:
        cleaned = value.strip().lstrip(".")
        if not cleaned or not EXTENSION_RE.match(cleaned):
            raise ValueError("Must be a single valid extension")
        return cleaned
