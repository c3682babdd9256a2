# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import logging

from rich.logging import RichHandler
from rich.text import Text

from .console import get_console_manager

PACKAGE_LOGGER = "multilint"


def configure_logging(*, debug: bool, use_color: bool = True) -> None:
    """Route package diagnostics to standard error through Rich.

    Args:
        debug: Emit DEBUG records (commands, outputs, ignored paths) when ``True``.
        use_color: Flag indicating whether ANSI colour support is desired.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    console = get_console_manager().get(color=use_color, emoji=False, stderr=True)
    handler = RichHandler(console=console, show_time=False, show_path=debug, markup=False)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(label: str, msg: str, *, style: str, use_color: bool) -> None:
    console = get_console_manager().get(color=use_color, emoji=False, stderr=True)
    text = Text(label, style=style if use_color else "")
    text.append(f" {msg}")
    console.print(text)


def fail(msg: str, *, use_emoji: bool, use_color: bool = True) -> None:
    """Emit an error message on standard error.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Flag indicating whether ANSI colour support is desired.
    """

    _print_line(f"{emoji('❌ ', use_emoji)}error:", msg, style="bold red", use_color=use_color)


__all__ = ["PACKAGE_LOGGER", "configure_logging", "emoji", "fail"]
