"""Runtime configuration: environment settings and JSON config files.

Precedence, highest first: command-line options, the ``--config`` file,
``COPY_CLI_*`` environment variables (and ``.env``), built-in defaults.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from copy_cli.errors import ConfigError
from copy_cli.schemas import ConfigFileModel

APP_NAME = "copy-cli"


def get_user_state_dir() -> Path:
    """Per-user directory for logs and plugins (cross-platform)."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("LOCALAPPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_STATE_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".local" / "state" / APP_NAME


class AppSettings(BaseSettings):
    """Environment-driven defaults for the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="COPY_CLI_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    concurrency: int = Field(
        default=5,
        ge=1,
        description="Number of parallel copy operations.",
    )
    overwrite: bool = Field(
        default=False,
        description="Overwrite existing files instead of renaming.",
    )
    log_dir: Path = Field(
        default_factory=lambda: get_user_state_dir() / "logs",
        description="Directory for combined.log and error.log.",
    )
    log_level: str | None = Field(
        default=None,
        description="Console log level; console logging is off when unset.",
    )
    plugin_dir: Path | None = Field(
        default=None,
        description="Directory scanned for *.py plugin modules.",
    )
    lang: str | None = Field(
        default=None,
        description="Interface language (en, fr, es, ar).",
    )


def load_settings() -> AppSettings:
    """Load environment settings, wrapping validation errors."""
    try:
        return AppSettings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid COPY_CLI_* environment settings: {exc}") from exc


def load_config_file(path: Path) -> ConfigFileModel:
    """Read and validate a JSON config file.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not a JSON object, or fails validation.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Configuration file {path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration file {path} must contain a JSON object.")
    try:
        return ConfigFileModel.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration file {path}: {exc}") from exc
