"""Logging setup: JSON-line log files plus an optional console handler."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

LOGGER_NAME = "copy_cli"
LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "verbose": VERBOSE,
    "debug": logging.DEBUG,
}

_HANDLER_MARK = "_copy_cli_handler"


class JsonLineFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .strftime("%Y-%m-%d %H:%M:%S"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["stack"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    return handler


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_dir: Path | None,
    console_level: str | None = None,
) -> logging.Logger:
    """Configure the ``copy_cli`` logger.

    Parameters
    ----------
    log_dir : Path | None
        Directory for ``combined.log`` and ``error.log``. ``None`` disables
        file logging.
    console_level : str | None, optional
        Name from :data:`LEVELS`; when omitted nothing is logged to the console.

    Returns
    -------
    logging.Logger
        The configured package logger.

    Notes
    -----
    A log directory that cannot be created is reported on stderr and file
    logging is skipped; the run goes on.
    """
    logger = logging.getLogger(LOGGER_NAME)
    _reset(logger)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if log_dir is not None:
        file_handlers: list[logging.Handler] = []
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            for filename, level in (
                ("combined.log", logging.INFO),
                ("error.log", logging.ERROR),
            ):
                handler = logging.FileHandler(log_dir / filename, encoding="utf-8")
                handler.setLevel(level)
                file_handlers.append(handler)
        except OSError as exc:
            for handler in file_handlers:
                handler.close()
            print(
                f"Could not create log directory '{log_dir}': {exc}",
                file=sys.stderr,
            )
        else:
            for handler in file_handlers:
                handler.setFormatter(JsonLineFormatter())
                logger.addHandler(_tag(handler))

    if console_level:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(LEVELS[console_level])
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(_tag(console))

    if not logger.handlers:
        logger.addHandler(_tag(logging.NullHandler()))
    return logger
