# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem traversal that selects the files handed to a linter."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pathspec import GitIgnoreSpec

from ..constants import GIT_INFO_EXCLUDE, IGNORE_FILE_NAMES, NON_VCS_IGNORE_FILE_NAMES, VCS_DIR_NAME
from .matcher import MatchResult, OverrideMatcher

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IgnoreRules:
    """Gitignore patterns anchored at ``base``."""

    base: Path
    spec: GitIgnoreSpec

    def verdict(self, path: Path, *, is_dir: bool) -> bool | None:
        """Return ``True`` (ignored), ``False`` (re-included) or ``None`` (no opinion).

        Args:
            path: Absolute path under evaluation.
            is_dir: Whether ``path`` is a directory.

        Returns:
            bool | None: Outcome of the last matching pattern, if any.
        """

        try:
            relative = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if is_dir:
            relative = f"{relative}/"
        outcome: bool | None = None
        for pattern in self.spec.patterns:
            if pattern.include is not None and pattern.match_file(relative):
                outcome = pattern.include
        return outcome


def _load_rules(source: Path, base: Path) -> IgnoreRules | None:
    """Read gitignore patterns from ``source``; unreadable files are logged and skipped."""

    try:
        lines = source.read_text(encoding="utf-8", errors="replace").splitlines()
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        LOGGER.warning("traversal error: cannot read %s: %s", source, exc)
        return None
    try:
        spec = GitIgnoreSpec.from_lines(lines)
    except ValueError as exc:
        LOGGER.warning("ignoring malformed ignore file %s: %s", source, exc)
        return None
    return IgnoreRules(base=base, spec=spec)


def find_repository_top(root: Path) -> Path | None:
    """Return the nearest directory at or above ``root`` holding VCS metadata."""

    for candidate in (root, *root.parents):
        if (candidate / VCS_DIR_NAME).exists():
            return candidate
    return None


def is_submodule(directory: Path) -> bool:
    """Return whether ``directory`` looks like a linked submodule.

    A checked-out submodule carries a ``.git`` *file* pointing at the parent
    repository's module store, whereas the main tree has a ``.git`` directory.
    This is a heuristic, not a full reading of the VCS format.
    """

    return (directory / VCS_DIR_NAME).is_file()


class TreeWalker:
    """Walk a directory tree yielding files accepted by an :class:`OverrideMatcher`.

    Traversal is top-down and lexicographic per directory, so the result is
    deterministic for a fixed filesystem state. ``.git`` entries are never
    descended into or yielded. Inside a repository, ``.gitignore`` files (and
    ``.git/info/exclude``) are honoured; ``.ignore`` files are honoured
    everywhere.
    """

    def __init__(self, matcher: OverrideMatcher, *, exclude_submodules: bool) -> None:
        """Create a walker.

        Args:
            matcher: Include/exclude matcher applied to every regular file.
            exclude_submodules: Prune directories detected by :func:`is_submodule`.
        """

        self.matcher = matcher
        self.exclude_submodules = exclude_submodules

    def walk(self, root: Path) -> list[Path]:
        """Return the selected files under ``root`` as paths relative to ``root``.

        Args:
            root: Directory to traverse.

        Returns:
            list[Path]: Relative paths of selected regular files in walk order.
        """

        return list(self.iter_files(root))

    def iter_files(self, root: Path) -> Iterator[Path]:
        """Yield selected files lazily; see :meth:`walk`."""

        top = root.resolve()
        repository = find_repository_top(top)
        names = IGNORE_FILE_NAMES if repository is not None else NON_VCS_IGNORE_FILE_NAMES
        rules_by_dir: dict[str, tuple[IgnoreRules, ...]] = {
            str(top): self._ancestor_rules(top, repository, names) + self._dir_rules(top, names),
        }
        for dirpath, dirnames, filenames in os.walk(top, onerror=_log_walk_error):
            current = Path(dirpath)
            rules = rules_by_dir.pop(dirpath, ())
            kept_dirs: list[str] = []
            for name in sorted(dirnames):
                child = current / name
                if self._prune_directory(child, rules):
                    continue
                kept_dirs.append(name)
                rules_by_dir[str(child)] = rules + self._dir_rules(child, names)
            dirnames[:] = kept_dirs
            for name in sorted(filenames):
                relative = self._select_file(current / name, top, rules)
                if relative is not None:
                    yield relative

    def _prune_directory(self, directory: Path, rules: tuple[IgnoreRules, ...]) -> bool:
        if directory.name == VCS_DIR_NAME or directory.is_symlink():
            return True
        if self.exclude_submodules and is_submodule(directory):
            LOGGER.debug("skipping submodule %s", directory)
            return True
        if _is_ignored(directory, rules, is_dir=True):
            LOGGER.debug("ignoring directory %s", directory)
            return True
        return False

    def _select_file(self, path: Path, top: Path, rules: tuple[IgnoreRules, ...]) -> Path | None:
        if path.name == VCS_DIR_NAME:
            return None
        try:
            mode = path.lstat().st_mode
        except OSError as exc:
            LOGGER.warning("traversal error: %s", exc)
            return None
        if not stat.S_ISREG(mode):
            return None
        if _is_ignored(path, rules, is_dir=False):
            return None
        try:
            relative = path.relative_to(top)
        except ValueError:
            return None
        verdict = self.matcher.matches(relative)
        if verdict is MatchResult.INCLUDED:
            return relative
        if verdict is MatchResult.EXCLUDED:
            LOGGER.debug("ignoring %s: excluded", relative)
        return None

    @staticmethod
    def _dir_rules(directory: Path, names: tuple[str, ...]) -> tuple[IgnoreRules, ...]:
        loaded = (_load_rules(directory / name, directory) for name in names)
        return tuple(rules for rules in loaded if rules is not None)

    @classmethod
    def _ancestor_rules(
        cls,
        top: Path,
        repository: Path | None,
        names: tuple[str, ...],
    ) -> tuple[IgnoreRules, ...]:
        if repository is None:
            return ()
        collected: list[IgnoreRules] = []
        info_exclude = _load_rules(repository.joinpath(*GIT_INFO_EXCLUDE), repository)
        if info_exclude is not None:
            collected.append(info_exclude)
        for ancestor in reversed(top.parents):
            if ancestor.is_relative_to(repository):
                collected.extend(cls._dir_rules(ancestor, names))
        return tuple(collected)


def _is_ignored(path: Path, rules: tuple[IgnoreRules, ...], *, is_dir: bool) -> bool:
    """Apply ``rules`` from the deepest directory outwards; the first opinion wins."""

    for entry in reversed(rules):
        verdict = entry.verdict(path, is_dir=is_dir)
        if verdict is not None:
            return verdict
    return False


def _log_walk_error(error: OSError) -> None:
    LOGGER.warning("traversal error: %s", error)


def walk(root: Path, matcher: OverrideMatcher, exclude_submodules: bool) -> list[Path]:
    """Return files under ``root`` selected by ``matcher``.

    Args:
        root: Directory to traverse.
        matcher: Include/exclude matcher.
        exclude_submodules: Prune linked submodules when ``True``.

    Returns:
        list[Path]: Relative paths in deterministic walk order.
    """

    return TreeWalker(matcher, exclude_submodules=exclude_submodules).walk(root)


__all__ = ["IgnoreRules", "TreeWalker", "find_repository_top", "is_submodule", "walk"]
