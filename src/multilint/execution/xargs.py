# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Split long argument lists across several invocations of one program."""

from __future__ import annotations

import logging
import os
import struct
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..config import ConfigError
from ..constants import XARGS_PARTIAL_FAILURE
from ..process import CommandOptions, ExecutionError, resolve_executable, run_command

LOGGER = logging.getLogger(__name__)

POSIX_ARG_MAX_FALLBACK: Final[int] = 131_072
POSIX_HEADROOM: Final[int] = 2048
WINDOWS_COMMAND_LINE_MAX: Final[int] = 32_767
POINTER_SIZE: Final[int] = struct.calcsize("P")
IS_WINDOWS: Final[bool] = sys.platform == "win32"


def argument_cost(arg: str) -> int:
    """Return how much of the command-line budget ``arg`` consumes.

    On POSIX each argument costs its encoded bytes, a terminating NUL and an
    ``argv`` pointer. On Windows the whole command line is one UTF-16 string,
    so an argument costs its length, a separator and room for quoting.
    """

    if IS_WINDOWS:
        return len(arg) + 3
    return len(os.fsencode(arg)) + 1 + POINTER_SIZE


def _environment_size() -> int:
    return sum(len(os.fsencode(key)) + len(os.fsencode(value)) + 2 + POINTER_SIZE for key, value in os.environ.items())


def command_length_limit() -> int:
    """Return the argument budget available to a child process on this platform.

    Returns:
        int: Budget in the units used by :func:`argument_cost`.
    """

    if IS_WINDOWS:
        return WINDOWS_COMMAND_LINE_MAX
    try:
        arg_max = os.sysconf("SC_ARG_MAX")
    except (ValueError, OSError):
        arg_max = -1
    if arg_max <= 0:
        arg_max = POSIX_ARG_MAX_FALLBACK
    return arg_max - _environment_size() - POSIX_HEADROOM


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Folded result of every invocation made for one batched run.

    ``returncode`` is ``0`` when every invocation succeeded and
    :data:`~multilint.constants.XARGS_PARTIAL_FAILURE` otherwise; the streams
    are concatenated in invocation order.
    """

    returncode: int = 0
    stdout: bytes = b""
    stderr: bytes = b""
    invocations: int = 0

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass(slots=True)
class Xargs:
    """Run ``program common_args...`` over a variable list of arguments.

    Attributes:
        program: Executable to run.
        common_args: Arguments placed before every batch.
        max_args: Upper bound on batch size; ``1`` runs one argument per process.
        cwd: Working directory for every invocation; must be a directory.
        max_command_length: Overrides :func:`command_length_limit`.
    """

    program: str
    common_args: Sequence[str] = ()
    max_args: int | None = None
    cwd: Path | None = None
    max_command_length: int | None = None
    _limit: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.max_args is not None and self.max_args < 1:
            raise ValueError(f"max_args must be at least 1, got {self.max_args}")
        self._limit = self.max_command_length if self.max_command_length is not None else command_length_limit()

    def batches(self, args: Sequence[str]) -> list[list[str]]:
        """Partition ``args`` into batches that fit the command-line budget.

        Each batch is the longest prefix of the remaining arguments that stays
        within the budget and ``max_args``. The first remaining argument is
        always taken, even when it alone exceeds the budget, so the plan makes
        progress and the over-long invocation is still attempted.

        The program is charged under the absolute path it resolves to, since
        that is the ``argv[0]`` the child receives.

        Args:
            args: Variable arguments, typically file paths.

        Returns:
            list[list[str]]: Batches in invocation order; a single empty batch
            when ``args`` is empty.

        Raises:
            ExecutionError: If the program and common arguments alone exceed the budget.
        """

        executable = resolve_executable(self.program) or self.program
        base = argument_cost(executable) + sum(argument_cost(arg) for arg in self.common_args)
        if base > self._limit:
            raise ExecutionError([self.program, *self.common_args], "argument list too long")
        if not args:
            return [[]]
        planned: list[list[str]] = []
        index = 0
        while index < len(args):
            batch = [args[index]]
            used = base + argument_cost(args[index])
            index += 1
            while index < len(args) and (self.max_args is None or len(batch) < self.max_args):
                cost = argument_cost(args[index])
                if used + cost > self._limit:
                    break
                batch.append(args[index])
                used += cost
                index += 1
            planned.append(batch)
        return planned

    def output(self, args: Sequence[str] = ()) -> ExecutionResult:
        """Run every batch sequentially and fold the results.

        Args:
            args: Variable arguments appended after ``common_args``.

        Returns:
            ExecutionResult: Combined status and output streams.

        Raises:
            ConfigError: If ``cwd`` is set but is not a directory.
            ExecutionError: If a process cannot be spawned.
        """

        if self.cwd is not None and not self.cwd.is_dir():
            raise ConfigError(f"{self.cwd} is not a directory")
        options = CommandOptions(cwd=self.cwd)
        returncode = 0
        stdout: list[bytes] = []
        stderr: list[bytes] = []
        planned = self.batches(args)
        for batch in planned:
            command = [self.program, *self.common_args, *batch]
            LOGGER.debug("command: %s", command)
            completed = run_command(command, options=options)
            LOGGER.debug("output: %r", completed)
            if completed.returncode != 0:
                returncode = XARGS_PARTIAL_FAILURE
            stdout.append(completed.stdout or b"")
            stderr.append(completed.stderr or b"")
        return ExecutionResult(
            returncode=returncode,
            stdout=b"".join(stdout),
            stderr=b"".join(stderr),
            invocations=len(planned),
        )


def run_batched(
    program: str,
    fixed_args: Sequence[str],
    files: Sequence[str],
    *,
    max_files_per_invocation: int | None = None,
    work_dir: Path | None = None,
) -> ExecutionResult:
    """Run ``program fixed_args files...`` in as many invocations as required.

    Args:
        program: Executable to run.
        fixed_args: Leading arguments repeated in every invocation.
        files: File arguments distributed across invocations.
        max_files_per_invocation: Optional cap on files per invocation.
        work_dir: Optional working directory for every invocation.

    Returns:
        ExecutionResult: Folded status and concatenated output.
    """

    runner = Xargs(program, common_args=tuple(fixed_args), max_args=max_files_per_invocation, cwd=work_dir)
    return runner.output(files)


__all__ = [
    "ExecutionResult",
    "Xargs",
    "argument_cost",
    "command_length_limit",
    "run_batched",
]
