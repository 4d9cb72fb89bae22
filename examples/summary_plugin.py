#!/usr/bin/env python3
"""Example plugin that writes a JSON summary of each run.

Load it with ``copy-cli ... --plugin-module examples/summary_plugin.py`` or
drop it into the ``--plugin-dir`` folder.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from copy_cli.plugins.base import PluginContext


class RunSummaryPlugin:
    """Write ``copy-cli-summary.json`` next to the destination folder."""

    name = "run-summary"

    def install(self, context: PluginContext) -> None:
        """Record the run arguments and register a finish observer.

        The summary path can be overridden with ``COPY_CLI_SUMMARY_PATH``.
        """
        args = dict(context.args)
        default = Path(str(args.get("dest", "."))).expanduser().parent / "copy-cli-summary.json"
        summary_path = Path(os.environ.get("COPY_CLI_SUMMARY_PATH", default))

        def _write(exit_code: int) -> None:
            summary_path.write_text(
                json.dumps({"exit_code": exit_code, "args": args}, indent=2, default=str),
                encoding="utf-8",
            )
            context.logger.info("Run summary written to %s", summary_path)

        context.on_finish(_write)


PLUGIN = RunSummaryPlugin()
