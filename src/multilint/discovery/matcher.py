# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow-then-veto glob matching over paths relative to a walk root."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from enum import StrEnum
from pathlib import PurePath

from pathspec import GitIgnoreSpec

from ..config import ConfigError


class MatchResult(StrEnum):
    """Verdict returned by :meth:`OverrideMatcher.matches`."""

    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNSPECIFIED = "unspecified"


def escape_pattern(pattern: str) -> str:
    """Return ``pattern`` with a leading ``!`` escaped.

    A user-supplied ``!`` is matched literally; it must not be read as the
    gitignore negation operator.

    Args:
        pattern: Glob pattern taken from the configuration.

    Returns:
        str: Pattern safe to hand to the gitignore engine.
    """

    if pattern.startswith("!"):
        return f"\\{pattern}"
    return pattern


def _build_spec(patterns: Iterable[str], *, role: str) -> GitIgnoreSpec:
    escaped = [escape_pattern(pattern) for pattern in patterns]
    try:
        return GitIgnoreSpec.from_lines(escaped)
    except (ValueError, re.error) as exc:
        raise ConfigError(f"invalid {role} pattern in {escaped!r}: {exc}") from exc


class OverrideMatcher:
    """Match relative paths against include globs vetoed by exclude globs.

    Patterns use the gitignore dialect (``*``, ``**``, trailing ``/`` for
    directories). Any exclude match wins over any include match.
    """

    def __init__(self, includes: Sequence[str], excludes: Sequence[str]) -> None:
        """Compile ``includes`` and ``excludes``.

        Args:
            includes: Allow-list patterns.
            excludes: Veto patterns applied on top of the allow-list.

        Raises:
            ConfigError: If any pattern cannot be compiled.
        """

        self.includes = tuple(includes)
        self.excludes = tuple(excludes)
        self._include_spec = _build_spec(self.includes, role="include")
        self._exclude_spec = _build_spec(self.excludes, role="exclude")

    def matches(self, path: PurePath | str) -> MatchResult:
        """Classify ``path`` (relative to the walk root).

        Args:
            path: Relative path of a candidate file.

        Returns:
            MatchResult: ``EXCLUDED`` when any exclude matches, ``INCLUDED``
            when an include matches, otherwise ``UNSPECIFIED``.
        """

        candidate = PurePath(path).as_posix()
        if self._exclude_spec.match_file(candidate):
            return MatchResult.EXCLUDED
        if self._include_spec.match_file(candidate):
            return MatchResult.INCLUDED
        return MatchResult.UNSPECIFIED

    def __call__(self, path: PurePath | str) -> bool:
        """Return ``True`` when ``path`` should be selected."""

        return self.matches(path) is MatchResult.INCLUDED


__all__ = ["MatchResult", "OverrideMatcher", "escape_pattern"]
