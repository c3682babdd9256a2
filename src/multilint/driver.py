# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run every configured linter in turn and report through a printer."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .config import ConfigError, GlobalConfig, LinterConfig, RootConfig
from .config_loader import load_config
from .linter import Linter
from .parsing import DiagnosticParser
from .reporting import Printer

LOGGER = logging.getLogger(__name__)


def select_linters(config: RootConfig, only: Sequence[str] | None) -> list[tuple[str, LinterConfig]]:
    """Return configured linters ordered by name, optionally restricted to ``only``.

    Raises:
        ConfigError: If ``only`` names a linter that is not configured.
    """

    linters = config.iter_linters()
    if not only:
        return linters
    unknown = sorted(set(only) - set(config.linter))
    if unknown:
        raise ConfigError(f"unknown linter(s): {', '.join(unknown)}")
    wanted = set(only)
    return [(name, linter) for name, linter in linters if name in wanted]


def run_linter(
    name: str,
    linter_config: LinterConfig,
    global_config: GlobalConfig,
    root: Path,
    printer: Printer,
) -> bool:
    """Run one linter and report it; return whether it left the tree clean.

    A missing command or an empty file selection is reported and counts as
    success.

    Raises:
        ConfigError: If a pattern, format or working directory is invalid.
        ExecutionError: If the command cannot be spawned.
    """

    printer.start(name)
    linter = Linter.from_config(linter_config, global_config)
    if not linter.is_executable():
        printer.no_command(name)
        return True
    parser = DiagnosticParser.from_formats(linter_config.formats)
    outcome = linter.run(root)
    if outcome is None:
        printer.no_file(name)
        return True
    printer.status(name, outcome, parser)
    return outcome.success


def run_linters(
    root: Path,
    printer: Printer,
    *,
    config_path: Path | None = None,
    only: Sequence[str] | None = None,
) -> bool:
    """Run the configured linters under ``root``.

    A configuration error in one linter is reported and the remaining
    linters still run; the overall result is then a failure.

    Args:
        root: Project root handed to every linter.
        printer: Renderer for progress and outcomes.
        config_path: Explicit configuration file; defaults to the hierarchy above ``root``.
        only: Restrict the run to these linter names.

    Returns:
        bool: ``True`` when every executed linter succeeded.

    Raises:
        ConfigError: If the configuration cannot be loaded or ``only`` is invalid.
        ExecutionError: If a command cannot be spawned.
    """

    config = load_config(config_path if config_path is not None else root)
    ok = True
    for name, linter_config in select_linters(config, only):
        try:
            ok &= run_linter(name, linter_config, config.global_, root, printer)
        except ConfigError as exc:
            LOGGER.error("%s: %s", name, exc)
            printer.error(name, str(exc))
            ok = False
    return ok


__all__ = ["run_linter", "run_linters", "select_linters"]
