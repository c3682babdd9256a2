# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None


class ExecutionError(RuntimeError):
    """Raised when an external command cannot be spawned or its output cannot be read."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        """Initialise the error with the offending command.

        Args:
            command: Argument vector that failed to run.
            reason: Human-readable description of the failure.
        """

        program = command[0] if command else "<empty>"
        super().__init__(f"cannot run '{program}': {reason}")
        self.command = tuple(command)
        self.reason = reason


def resolve_executable(command: str) -> str | None:
    """Return the absolute path of ``command`` on ``PATH`` or ``None`` when missing."""

    return shutil.which(command)


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose head is an absolute executable path.

    Raises:
        ExecutionError: If no arguments are provided or the executable cannot be resolved.
    """

    if not args:
        raise ExecutionError(args, "subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = resolve_executable(head)
    if resolved is None:
        raise ExecutionError(args, "executable was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[bytes]:
    """Execute ``args`` to completion, capturing both output streams as bytes.

    A non-zero exit status is returned to the caller rather than raised.

    Args:
        args: Command and argument sequence to execute.
        options: Working directory and environment for the child.

    Returns:
        CompletedProcess[bytes]: Subprocess execution metadata.

    Raises:
        ExecutionError: If the process cannot be spawned.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    try:
        # Bandit: commands originate from vetted linter configurations; we pass
        # argument lists directly without shell expansion.
        completed: CompletedProcess[bytes] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=True,
        )
    except OSError as exc:
        raise ExecutionError(args, str(exc)) from exc
    LOGGER.debug("exit status %s from %s", completed.returncode, args[0])
    return completed


__all__ = ["CommandOptions", "ExecutionError", "resolve_executable", "run_command"]
