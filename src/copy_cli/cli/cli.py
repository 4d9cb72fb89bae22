#!/usr/bin/env python3
"""
copy_cli.cli.cli

Typer-based CLI that copies files by extension into a destination folder.

Required values (``--src``, ``--ext``, ``--target-ext``, ``--dest``) may come
from the command line, a JSON ``--config`` file or an interactive prompt.

Examples
--------
Copy every ``.js`` and ``.ts`` file from two folders as ``.txt``:

    copy-cli --src src,lib --ext js,ts --target-ext txt --dest out

Preview without writing anything:

    copy-cli -s src -e js -t txt -d out --dry-run
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Callable
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from copy_cli import __version__
from copy_cli.adapters.discovery import split_list
from copy_cli.application.results import Collision, CopyOutcome, CopyReport, PlannedCopy
from copy_cli.config import AppSettings, load_config_file, load_settings
from copy_cli.errors import ConfigError, CopyCliError
from copy_cli.i18n import Language, Translator
from copy_cli.infrastructure.logging_config import LEVELS, configure_logging
from copy_cli.plugins.base import PluginContext
from copy_cli.schemas import EXTENSION_RE, ConfigFileModel, CopyRunConfig

app = typer.Typer(
    name="copy-cli",
    help="Copy files by extension into a destination folder, optionally changing their extension.",
    add_completion=True,
)

logger = logging.getLogger("copy_cli.cli")


class LogLevel(str, Enum):
    """Console log levels accepted by ``--log-level``."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"
    DEBUG = "debug"


@dataclass(frozen=True)
class RunParameters:
    """Merged values of one invocation, before validation."""

    src: str
    ext: str
    target_ext: str
    dest: str
    overwrite: bool
    dry_run: bool
    concurrency: int


def _is_interactive() -> bool:
    """Whether prompts and progress bars can be shown."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def _pick(*values: Any) -> Any:
    """Return the first value that is not ``None``."""
    for value in values:
        if value is not None:
            return value
    return None


def _joined(value: list[str] | None) -> str | None:
    return ",".join(value) if value else None


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _print_unexpected_error(exc: Exception, debug: bool, tr: Translator) -> int:
    """Print a user-friendly message for an unexpected error.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(tr("An unexpected critical error occurred:"), fg="red", err=True)
    typer.secho(f"{type(exc).__name__}: {exc}", fg="red", err=True)
    if debug:
        typer.echo("\n" + "".join(traceback.format_exception(exc)), err=True)
    return 1


# -----------------------------
# Language and required values
# -----------------------------
def _choose_language(explicit: str | None) -> Language:
    """Resolve the interface language, prompting on interactive terminals."""
    if explicit:
        try:
            return Language(explicit.lower())
        except ValueError as exc:
            raise typer.BadParameter(
                f"Unsupported language '{explicit}'. Choose from: "
                f"{', '.join(lang.value for lang in Language)}",
                param_hint="--lang",
            ) from exc

    detected = Language.from_environment()
    if not _is_interactive():
        return detected

    tr = Translator(detected)
    typer.secho(tr("Welcome to copy-cli! Please choose your language"), fg="blue")
    for lang in Language:
        typer.echo(f"  {lang.value}  {lang.label()}")

    def _parse(value: str) -> Language:
        try:
            return Language(value.strip().lower())
        except ValueError as exc:
            raise typer.BadParameter(
                f"Choose from: {', '.join(lang.value for lang in Language)}"
            ) from exc

    return typer.prompt("Language", default=detected.value, value_proc=_parse)


def _list_validator(tr: Translator, *, paths: bool) -> Callable[[str], str]:
    def _validate(value: str) -> str:
        items = split_list(value, paths=paths)
        if not items:
            raise typer.BadParameter(tr("Value cannot be empty"))
        if not paths and any(not EXTENSION_RE.match(item) for item in items):
            raise typer.BadParameter(tr("Contains invalid characters"))
        return value

    return _validate


def _extension_validator(tr: Translator) -> Callable[[str], str]:
    def _validate(value: str) -> str:
        cleaned = value.strip().lstrip(".")
        if not cleaned or not EXTENSION_RE.match(cleaned):
            raise typer.BadParameter(tr("Must be a single valid extension"))
        return cleaned

    return _validate


def _required_validator(tr: Translator) -> Callable[[str], str]:
    def _validate(value: str) -> str:
        if not value.strip():
            raise typer.BadParameter(tr("Value cannot be empty"))
        return value.strip()

    return _validate


def _prompt_if_missing(
    name: str,
    value: str | None,
    message: str,
    validator: Callable[[str], str],
    tr: Translator,
) -> str:
    """Return ``value``, prompting for it on interactive terminals when missing.

    Raises
    ------
    typer.BadParameter
        If the value is missing and no prompt can be shown, or is invalid.
    """
    if value is not None:
        try:
            return validator(value)
        except typer.BadParameter as exc:
            raise typer.BadParameter(
                tr("Invalid value provided for required option --%s: %s", name, exc.message),
                param_hint=f"--{name}",
            ) from exc

    if not _is_interactive():
        raise typer.BadParameter(
            tr("Missing required argument: --%s", name), param_hint=f"--{name}"
        )
    logger.info("Missing required argument: %s. Prompting user...", name)
    return typer.prompt(message, value_proc=validator)


def _resolve_parameters(
    *,
    tr: Translator,
    settings: AppSettings,
    file_cfg: ConfigFileModel,
    src: str | None,
    ext: str | None,
    target_ext: str | None,
    dest: Path | None,
    overwrite: bool | None,
    dry_run: bool | None,
    concurrency: int | None,
) -> RunParameters:
    """Merge CLI, config-file and environment values, prompting for gaps."""
    src_value = _prompt_if_missing(
        "src",
        _pick(src, _joined(file_cfg.src)),
        tr("Enter Source folders (comma-separated)"),
        _list_validator(tr, paths=True),
        tr,
    )
    ext_value = _prompt_if_missing(
        "ext",
        _pick(ext, _joined(file_cfg.ext)),
        tr("Enter Extensions to copy (e.g., js,txt)"),
        _list_validator(tr, paths=False),
        tr,
    )
    target_value = _prompt_if_missing(
        "target-ext",
        _pick(target_ext, file_cfg.target_ext),
        tr("Enter Output extension (e.g., txt)"),
        _extension_validator(tr),
        tr,
    )
    dest_raw = _pick(dest, file_cfg.dest)
    dest_value = _prompt_if_missing(
        "dest",
        str(dest_raw) if dest_raw is not None else None,
        tr("Enter Destination folder"),
        _required_validator(tr),
        tr,
    )
    return RunParameters(
        src=src_value,
        ext=ext_value,
        target_ext=target_value,
        dest=dest_value,
        overwrite=bool(_pick(overwrite, file_cfg.overwrite, settings.overwrite)),
        dry_run=bool(_pick(dry_run, file_cfg.dry_run, False)),
        concurrency=int(_pick(concurrency, file_cfg.concurrency, settings.concurrency)),
    )


def _validate_parameters(params: RunParameters) -> CopyRunConfig:
    try:
        return CopyRunConfig(
            sources=params.src,
            extensions=params.ext,
            target_extension=params.target_ext,
            destination=Path(params.dest).expanduser(),
            overwrite=params.overwrite,
            dry_run=params.dry_run,
            concurrency=params.concurrency,
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid copy parameters: {exc}") from exc


# -----------------------------
# Output
# -----------------------------
def _relative(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _print_dry_run(plan: tuple[PlannedCopy, ...], tr: Translator) -> None:
    typer.secho(tr("--- DRY RUN MODE ---"), fg="yellow")
    typer.echo(tr("The following operations would be performed:"))
    for planned in plan:
        line = f" • Copy: {_relative(planned.task.source_path)} → {_relative(planned.target_path)}"
        if planned.collision is Collision.OVERWRITE:
            line += " " + typer.style(tr("[Info] Target exists - would overwrite"), fg="magenta")
        elif planned.collision is Collision.RENAME:
            line += " " + typer.style(tr("[Warning] Target exists - would rename"), fg="yellow")
        typer.echo(line)
    typer.secho(tr("--- END DRY RUN ---"), fg="yellow")


def _print_summary(report: CopyReport, tr: Translator) -> None:
    if report.failed:
        typer.secho(
            tr("Copy operation completed with %d error(s).", len(report.failed)),
            fg="red",
            err=True,
        )
        for failure in report.failed:
            typer.secho(
                f" - {_relative(failure.source_path)}: {failure.error_message}",
                fg="red",
                err=True,
            )
        if report.succeeded:
            typer.secho(
                tr.ngettext(
                    "%d file copied successfully",
                    "%d files copied successfully",
                    report.succeeded,
                ),
                fg="yellow",
            )
        logger.error(
            "Copy operation completed with %d error(s). %d succeeded.",
            len(report.failed),
            report.succeeded,
        )
        return

    message = tr.ngettext(
        "Copy operation completed successfully: %d file copied.",
        "Copy operation completed successfully: %d files copied.",
        report.succeeded,
    )
    typer.secho(message, fg="green")
    logger.info(message)


# -----------------------------
# Execution
# -----------------------------
def _find_files(run: CopyRunConfig, tr: Translator) -> list[Path]:
    from copy_cli.api import find_files

    logger.info(tr("Searching for files..."))
    if _is_interactive():
        from rich.console import Console

        with Console().status(tr("Searching for files...")):
            files = find_files(run.sources, run.extensions)
    else:
        files = find_files(run.sources, run.extensions)
    typer.echo(tr("Found %d file(s) matching criteria.", len(files)))
    return files


def _copy_with_progress(
    files: list[Path], run: CopyRunConfig, tr: Translator
) -> CopyReport:
    from copy_cli.api import copy_files

    kwargs: dict[str, Any] = {
        "source_paths": files,
        "destination_dir": run.destination,
        "target_extension": run.target_extension,
        "overwrite": run.overwrite,
        "concurrency": run.concurrency,
    }
    if not _is_interactive():
        logger.info("Progress bar disabled in non-TTY environment. Starting copy...")
        return copy_files(**kwargs)

    from rich.progress import (
        BarColumn,
        MofNCompleteColumn,
        Progress,
        TextColumn,
        TimeRemainingColumn,
    )

    with Progress(
        TextColumn(f"[cyan]{tr('Copying')}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
    ) as progress:
        bar = progress.add_task("copy", total=len(files))

        def _advance(outcome: CopyOutcome) -> None:
            del outcome
            progress.advance(bar)

        return copy_files(**kwargs, on_complete=_advance)


def _execute(run: CopyRunConfig, tr: Translator, assume_yes: bool) -> int:
    """Run search, dry-run or copy and return the process exit code."""
    from copy_cli.api import preview_copy, prepare_destination

    if not run.dry_run:
        logger.info("Ensuring destination directory exists: %s", run.destination)
        prepare_destination(run.destination)

        if _is_interactive() and not assume_yes:
            if not typer.confirm(tr("Start copy operation now?"), default=True):
                logger.warning(tr("Operation cancelled by user."))
                typer.echo(tr("Operation cancelled by user."))
                return 0

    files = _find_files(run, tr)
    if not files:
        message = tr("No files found matching the specified criteria. Nothing to copy.")
        logger.warning(message)
        typer.echo(message)
        return 0

    if run.dry_run:
        plan = preview_copy(
            files,
            run.destination,
            run.target_extension,
            overwrite=run.overwrite,
        )
        _print_dry_run(plan, tr)
        return 0

    report = _copy_with_progress(files, run, tr)
    _print_summary(report, tr)
    return report.exit_code


# -----------------------------
# Command
# -----------------------------
@app.command()
def main(
    src: str | None = typer.Option(
        None, "--src", "-s", help="Source folders (comma-separated)."
    ),
    ext: str | None = typer.Option(
        None, "--ext", "-e", help="Extensions to copy (comma-separated, e.g. js,txt)."
    ),
    target_ext: str | None = typer.Option(
        None, "--target-ext", "-t", help="Output extension (e.g. txt)."
    ),
    dest: Path | None = typer.Option(None, "--dest", "-d", help="Destination folder."),
    overwrite: bool | None = typer.Option(
        None, "--overwrite/--no-overwrite", "-o", help="Overwrite existing files."
    ),
    dry_run: bool | None = typer.Option(
        None, "--dry-run", "-D", help="Simulate operations without copying files."
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", "-c", min=1, help="Number of parallel copy operations. [default: 5]"
    ),
    log_level: LogLevel | None = typer.Option(
        None, "--log-level", help="Enable console logging at the given level."
    ),
    log_dir: Path | None = typer.Option(
        None, "--log-dir", help="Directory for combined.log and error.log."
    ),
    lang: str | None = typer.Option(
        None, "--lang", help="Interface language (en, fr, es, ar)."
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file providing option values.",
    ),
    plugin_module: list[str] | None = typer.Option(
        None,
        "--plugin-module",
        help="Plugin module import path or file path (repeatable).",
    ),
    plugin_dir: Path | None = typer.Option(
        None, "--plugin-dir", help="Directory scanned for *.py plugins."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version number.",
    ),
) -> None:
    """Copy files matching extensions from source folders into a destination."""
    del version
    try:
        settings = load_settings()
        file_cfg = load_config_file(config) if config else ConfigFileModel()
    except ConfigError as exc:
        typer.secho(str(exc), fg="red", err=True)
        raise typer.Exit(code=exc.exit_code)

    tr = Translator(_choose_language(_pick(lang, file_cfg.lang, settings.lang)))

    level_name = _pick(
        log_level.value if log_level else None, file_cfg.log_level, settings.log_level
    )
    if level_name is not None and level_name not in LEVELS:
        raise typer.BadParameter(
            f"Unknown log level '{level_name}'. Choose from: {', '.join(LEVELS)}",
            param_hint="--log-level",
        )
    app_logger = configure_logging(_pick(log_dir, settings.log_dir), level_name)
    if level_name:
        typer.secho(tr("Console logging enabled at level: %s", level_name), fg="yellow")
    app_logger.info("Using language: %s", tr.language.value)
    app_logger.info("copy-cli v%s started.", __version__)
    if config:
        app_logger.info(tr("Using configuration file: %s", config))

    params = _resolve_parameters(
        tr=tr,
        settings=settings,
        file_cfg=file_cfg,
        src=src,
        ext=ext,
        target_ext=target_ext,
        dest=dest,
        overwrite=overwrite,
        dry_run=dry_run,
        concurrency=concurrency,
    )

    from copy_cli.plugins.registry import create_default_registry

    context = PluginContext(logger=app_logger, translate=tr, args=asdict(params))
    registry = create_default_registry(
        extra_modules=_pick(plugin_module, file_cfg.plugin_modules),
        plugin_dir=_pick(plugin_dir, settings.plugin_dir),
    )
    registry.install_all(context)

    try:
        run = _validate_parameters(params)
        exit_code = _execute(run, tr, assume_yes=yes)
    except CopyCliError as exc:
        app_logger.error("%s", exc)
        typer.secho(str(exc), fg="red", err=True)
        exit_code = exc.exit_code
    except typer.Abort:
        context.notify_finish(1)
        raise
    except Exception as exc:
        app_logger.exception("An unexpected critical error occurred in main execution")
        exit_code = _print_unexpected_error(exc, debug, tr)

    context.notify_finish(exit_code)
    raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()
