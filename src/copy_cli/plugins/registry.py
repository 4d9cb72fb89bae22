"""Plugin registry and discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from copy_cli.errors import PluginError
from copy_cli.plugins.base import CopyPlugin, PluginContext
from copy_cli.plugins.builtins import TimestampPlugin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModulePlugin:
    """Adapt a module-level ``install(context)`` function to :class:`CopyPlugin`."""

    name: str
    install_fn: Callable[[PluginContext], object]

    def install(self, context: PluginContext) -> None:
        self.install_fn(context)


class PluginRegistry:
    """Registry for copy-cli plugins."""

    def __init__(self) -> None:
        self._plugins: dict[str, CopyPlugin] = {}

    def register(self, plugin: CopyPlugin) -> None:
        """Register plugin instance by unique name.

        Raises
        ------
        PluginError
            If plugin does not provide a valid name or ``install`` method.
        """
        name = getattr(plugin, "name", "").strip()
        if not name:
            raise PluginError("Plugin must define a non-empty 'name'.")
        if not callable(getattr(plugin, "install", None)):
            raise PluginError(f"Plugin '{name}' must define install(context).")
        self._plugins[name] = plugin

    def names(self) -> list[str]:
        """Return registered plugin names, sorted."""
        return sorted(self._plugins.keys())

    def get(self, name: str) -> CopyPlugin:
        """Get plugin by name.

        Raises
        ------
        PluginError
            If plugin name is not registered.
        """
        try:
            return self._plugins[name]
        except KeyError as exc:
            raise PluginError(
                f"Unknown plugin '{name}'. Available plugins: {', '.join(self.names())}"
            ) from exc

    def load_module(self, module_or_path: str) -> None:
        """Load plugins from module name or file path.

        .. warning::
            This executes code from the specified module. Only load plugins
            from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)

    def load_directory(self, directory: Path) -> list[str]:
        """Load every ``*.py`` module in ``directory``.

        A module that fails to load is logged and skipped.

        Returns
        -------
        list[str]
            File names that loaded successfully.
        """
        if not directory.is_dir():
            logger.info("Plugin directory not found: %s", directory)
            return []
        loaded: list[str] = []
        for path in sorted(directory.glob("*.py")):
            if path.name.startswith("_"):
                continue
            try:
                self.load_module(str(path))
            except Exception:
                logger.exception("Failed to load plugin module: %s", path.name)
                continue
            loaded.append(path.name)
        return loaded

    def install_all(self, context: PluginContext) -> list[str]:
        """Install every registered plugin.

        A plugin raising during ``install`` is logged and skipped; the run
        continues.

        Returns
        -------
        list[str]
            Names of plugins that installed successfully.
        """
        installed: list[str] = []
        for name in self.names():
            try:
                self._plugins[name].install(context)
            except Exception:
                context.logger.exception(
                    context.translate("Failed to load or execute plugin: %s", name)
                )
                continue
            context.logger.info(context.translate("Plugin loaded successfully: %s", name))
            installed.append(name)
        return installed


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    .. warning::
        This function executes arbitrary Python code from the specified module
        or file. Only load plugins from trusted sources.

    Raises
    ------
    PluginError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(
            f"copy_cli_plugin_{candidate.stem}", candidate
        )
        if spec is None or spec.loader is None:
            raise PluginError(f"Unable to load plugin module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise PluginError(
                f"Unable to execute plugin module {candidate}: {exc}"
            ) from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise PluginError(
            f"Unable to import plugin module '{module_or_path}': {exc}"
        ) from exc


def _module_label(module: ModuleType) -> str:
    file = getattr(module, "__file__", None)
    if file:
        return Path(file).stem
    return module.__name__.rsplit(".", 1)[-1]


def _register_from_module(module: ModuleType, registry: PluginRegistry) -> None:
    """Register plugin definitions found in module.

    Modules may expose ``register_plugins(registry)``, ``PLUGINS``, ``PLUGIN``
    or a bare ``install(context)`` function.
    """
    if hasattr(module, "register_plugins"):
        module.register_plugins(registry)
        return

    plugins_obj = getattr(module, "PLUGINS", None)
    if plugins_obj is not None:
        for plugin in plugins_obj:
            registry.register(plugin)
        return

    plugin_obj = getattr(module, "PLUGIN", None)
    if plugin_obj is not None:
        registry.register(plugin_obj)
        return

    install_fn = getattr(module, "install", None)
    if callable(install_fn):
        registry.register(ModulePlugin(name=_module_label(module), install_fn=install_fn))
        return

    raise PluginError(
        "Plugin module must expose register_plugins(registry), PLUGINS, PLUGIN "
        "or install(context)."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
    plugin_dir: Path | None = None,
) -> PluginRegistry:
    """Create default plugin registry.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional plugin modules (import paths or files) to load.
    plugin_dir : Path | None, optional
        Directory of plugin files.

    Notes
    -----
    Modules that fail to load are logged and skipped.

    Returns
    -------
    PluginRegistry
        Registry with built-in and external plugins.
    """
    registry = PluginRegistry()
    registry.register(TimestampPlugin())
    for module in extra_modules or []:
        try:
            registry.load_module(module)
        except Exception:
            logger.exception("Failed to load plugin module: %s", module)
    if plugin_dir is not None:
        registry.load_directory(plugin_dir)
    return registry
