"""Plugin protocol and the context handed to plugins."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from copy_cli.types import RunArguments, TranslateFn

FinishObserver = Callable[[int], None]


@dataclass(frozen=True)
class PluginContext:
    """Read-only bundle passed to :meth:`CopyPlugin.install`.

    Parameters
    ----------
    logger : logging.Logger
        Logger plugins should write to.
    translate : Callable[..., str]
        Message lookup for the active interface language.
    args : Mapping[str, Any]
        Parsed run arguments.
    """

    logger: logging.Logger
    translate: TranslateFn
    args: RunArguments
    _observers: list[FinishObserver] = field(default_factory=list, repr=False)

    def on_finish(self, observer: FinishObserver) -> None:
        """Register ``observer`` to be called with the exit code after the run."""
        self._observers.append(observer)

    def notify_finish(self, exit_code: int) -> None:
        """Call every finish observer in registration order.

        Observer failures are logged and never propagated.
        """
        for observer in list(self._observers):
            try:
                observer(exit_code)
            except Exception:
                self.logger.exception("plugin finish observer failed")


@runtime_checkable
class CopyPlugin(Protocol):
    """Protocol implemented by copy-cli plugins."""

    name: str

    def install(self, context: PluginContext) -> None:
        """Set up the plugin before copying begins.

        Parameters
        ----------
        context : PluginContext
            Logger, translation lookup and parsed arguments.
        """
