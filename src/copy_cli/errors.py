"""Exception hierarchy for copy-cli."""

from __future__ import annotations


class CopyCliError(Exception):
    """Base error for user-facing copy-cli failures."""

    exit_code: int = 1


class PreconditionError(CopyCliError):
    """Raised when a run cannot start (destination, configuration, search)."""


class ConfigError(PreconditionError):
    """Raised when configuration files or values are invalid."""


class PluginError(CopyCliError):
    """Raised when a plugin cannot be loaded or registered."""
