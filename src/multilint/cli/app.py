# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer

from ..config import ConfigError
from ..console import get_console_manager
from ..constants import EXIT_LINT_FAILED, EXIT_OK, EXIT_STARTUP_FAILED
from ..driver import run_linters
from ..logging import configure_logging, fail
from ..process import ExecutionError
from ..reporting import OutputFormat, create_printer

LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="multilint",
    help="Run the linters configured in multilint.toml and report whether the tree is clean.",
    add_completion=False,
    no_args_is_help=False,
)


def _change_directory(directory: Path | None) -> Path:
    """Switch to ``directory`` when given and return the resulting working directory."""

    if directory is not None:
        LOGGER.debug("change CWD: %s", directory)
        os.chdir(directory)
    return Path.cwd()


@app.command()
def lint(
    directory: Path | None = typer.Option(
        None,
        "-C",
        "--directory",
        help="Change to this directory before running.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format.",
    ),
    linters: list[str] | None = typer.Option(
        None,
        "--linter",
        "-l",
        help="Run only this linter (repeatable).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Use this configuration file instead of searching for multilint.toml.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Log commands and their output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colour output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji in messages."),
) -> None:
    """Run every configured linter and exit non-zero if any of them failed.

    Raises:
        typer.Exit: ``0`` when all linters succeeded, ``1`` when any failed,
            ``2`` when the run could not start.
    """

    use_color = not no_color
    configure_logging(debug=debug, use_color=use_color)
    config_path = config.resolve() if config is not None else None
    try:
        root = _change_directory(directory)
        printer = create_printer(output_format, get_console_manager().get(color=use_color, emoji=False))
        ok = run_linters(root, printer, config_path=config_path, only=linters)
    except (ConfigError, ExecutionError, OSError) as exc:
        fail(str(exc), use_emoji=not no_emoji, use_color=use_color)
        raise typer.Exit(code=EXIT_STARTUP_FAILED) from exc
    raise typer.Exit(code=EXIT_OK if ok else EXIT_LINT_FAILED)


__all__ = ["app", "lint"]
