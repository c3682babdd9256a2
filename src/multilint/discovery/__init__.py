# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File selection: override pattern matching and tree walking."""

from __future__ import annotations

from .matcher import MatchResult, OverrideMatcher, escape_pattern
from .walker import TreeWalker, is_submodule, walk

__all__ = [
    "MatchResult",
    "OverrideMatcher",
    "TreeWalker",
    "escape_pattern",
    "is_submodule",
    "walk",
]
