# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Select files for one linter, run it, and judge whether the tree stayed clean."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import GlobalConfig, LinterConfig
from .discovery import OverrideMatcher, TreeWalker
from .execution import ChangeDetector, ExecutionResult, Xargs
from .process import resolve_executable

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Outcome:
    """Terminal result of one linter run.

    A run is successful only when every invocation exited with status zero
    and no selected file was modified as a side effect.
    """

    result: ExecutionResult
    modified: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def stdout(self) -> bytes:
        return self.result.stdout

    @property
    def stderr(self) -> bytes:
        return self.result.stderr

    @property
    def returncode(self) -> int:
        return self.result.returncode

    @property
    def success(self) -> bool:
        return self.result.success and not self.modified


@dataclass(frozen=True, slots=True)
class Linter:
    """Immutable execution plan for one configured tool."""

    command: str
    options: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    work_dir: Path = Path()
    exclude_submodules: bool = True
    max_files_per_invocation: int | None = None
    check_hash: bool = False

    @classmethod
    def from_config(cls, config: LinterConfig, global_config: GlobalConfig | None = None) -> Linter:
        """Build a linter from its configuration, appending the global excludes.

        Args:
            config: Tool configuration.
            global_config: Settings shared by every tool.

        Returns:
            Linter: Ready-to-run linter.
        """

        shared = global_config or GlobalConfig()
        return cls(
            command=config.command,
            options=config.options,
            includes=config.includes,
            excludes=(*shared.excludes, *config.excludes),
            work_dir=config.work_dir,
            exclude_submodules=config.exclude_submodules,
            max_files_per_invocation=config.max_files_per_invocation,
            check_hash=config.check_hash,
        )

    def is_executable(self) -> bool:
        """Return whether the command resolves on ``PATH``."""

        return resolve_executable(self.command) is not None

    def paths(self, root: Path) -> list[Path]:
        """Return files under ``root`` selected for this linter, relative to ``root``.

        Returns an empty list without walking when no includes are configured.

        Raises:
            ConfigError: If an include or exclude pattern is invalid.
        """

        if not self.includes:
            return []
        matcher = OverrideMatcher(self.includes, self.excludes)
        return TreeWalker(matcher, exclude_submodules=self.exclude_submodules).walk(root)

    def run_files(self, root: Path, files: list[Path]) -> Outcome:
        """Run the command over ``files`` (relative to ``root``) and check for side effects.

        Args:
            root: Project root; file arguments and ``work_dir`` are resolved against it.
            files: Relative paths to pass to the command.

        Returns:
            Outcome: Folded execution result and modified files.

        Raises:
            ConfigError: If ``work_dir`` is not a directory.
            ExecutionError: If the command cannot be spawned.
        """

        targets = [root / path for path in files]
        cwd = root / self.work_dir if self.work_dir != Path() else None
        runner = Xargs(
            self.command,
            common_args=self.options,
            max_args=self.max_files_per_invocation,
            cwd=cwd,
        )
        detector = ChangeDetector(use_hash=self.check_hash)
        snapshots = detector.capture(targets)
        result = runner.output([str(target) for target in targets])
        modified = tuple(path.relative_to(root) for path in detector.changed(snapshots))
        if modified:
            LOGGER.debug("modified by %s: %s", self.command, modified)
        return Outcome(result=result, modified=modified)

    def run(self, root: Path) -> Outcome | None:
        """Select files under ``root`` and run the linter over them.

        Args:
            root: Project root.

        Returns:
            Outcome | None: ``None`` when includes are configured but nothing
            matched; otherwise the outcome of the run. With no includes the
            command runs once with no file arguments.
        """

        files = self.paths(root)
        if self.includes and not files:
            LOGGER.debug("no files for %s", self.command)
            return None
        return self.run_files(root, files)


__all__ = ["Linter", "Outcome"]
