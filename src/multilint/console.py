# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for renderer output and diagnostics."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import TextIO

from rich.console import Console


def stream_is_terminal(stream: TextIO) -> bool:
    """Return whether ``stream`` is attached to a terminal.

    Streams replaced by test harnesses may lack ``isatty`` or be closed.
    """

    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleSettings:
    """Key identifying one console flavour."""

    color: bool
    emoji: bool
    stderr: bool
    terminal: bool

    @property
    def styled(self) -> bool:
        return self.color and self.terminal


class RichConsoleManager:
    """Hand out one :class:`Console` per combination of output preferences.

    Consoles do not bind a file object; Rich looks up ``sys.stdout`` or
    ``sys.stderr`` on each write, so redirected streams are honoured.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleSettings, Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console for the requested preferences.

        Args:
            color: Allow ANSI styling when the target stream is a terminal.
            emoji: Render ``:name:`` emoji codes.
            stderr: Write to standard error rather than standard output.

        Returns:
            Console: Shared console instance.
        """

        stream = sys.stderr if stderr else sys.stdout
        settings = ConsoleSettings(color=color, emoji=emoji, stderr=stderr, terminal=stream_is_terminal(stream))
        console = self._consoles.get(settings)
        if console is None:
            console = Console(
                color_system="auto" if settings.styled else None,
                force_terminal=settings.terminal,
                no_color=not settings.styled,
                emoji=settings.emoji,
                stderr=settings.stderr,
                soft_wrap=True,
                highlight=False,
            )
            self._consoles[settings] = console
        return console


def write_bytes(console: Console, data: bytes) -> None:
    """Write ``data`` to the stream behind ``console`` without Rich processing.

    Text already written through ``console`` is flushed first so ordering is
    kept. Streams lacking a binary ``buffer`` (such as ``io.StringIO``) receive
    the bytes decoded as UTF-8 with invalid sequences replaced.

    Args:
        console: Console whose target stream receives the bytes.
        data: Raw bytes, typically captured tool output.
    """

    if not data:
        return
    stream = console.file
    stream.flush()
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(data.decode("utf-8", errors="replace"))
        return
    buffer.write(data)
    buffer.flush()


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["ConsoleSettings", "RichConsoleManager", "get_console_manager", "stream_is_terminal", "write_bytes"]
