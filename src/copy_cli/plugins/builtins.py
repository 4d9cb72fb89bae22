"""Built-in plugins."""

from __future__ import annotations

import time
from datetime import datetime

from copy_cli.plugins.base import PluginContext


class TimestampPlugin:
    """Log when the run starts and how long it took."""

    name = "timestamp"

    def install(self, context: PluginContext) -> None:
        started = time.monotonic()
        tr = context.translate
        context.logger.info(
            "[TimestampPlugin] %s",
            tr("Plugin initialized at %s", datetime.now().strftime("%H:%M:%S")),
        )
        if context.args.get("dry_run"):
            context.logger.info(
                "[TimestampPlugin] %s", tr("Dry run mode detected by plugin.")
            )

        def _finished(exit_code: int) -> None:
            duration = time.monotonic() - started
            context.logger.info(
                "[TimestampPlugin] %s",
                tr(
                    "Plugin exiting. Code: %s, Duration: %s sec",
                    exit_code,
                    f"{duration:.2f}",
                ),
            )

        context.on_finish(_finished)
