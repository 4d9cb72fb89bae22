"""Plugin interfaces and registry for copy-cli."""

from .base import CopyPlugin, PluginContext
from .registry import PluginRegistry, create_default_registry

__all__ = ["CopyPlugin", "PluginContext", "PluginRegistry", "create_default_registry"]
