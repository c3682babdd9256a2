# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across multilint modules."""

from __future__ import annotations

from typing import Final

CONFIG_FILE_NAME: Final[str] = "multilint.toml"
"""Name of the configuration file discovered in each directory."""

VCS_DIR_NAME: Final[str] = ".git"
"""Version-control metadata entry; a directory in the main tree, a file in submodules."""

IGNORE_FILE_NAMES: Final[tuple[str, ...]] = (".gitignore", ".ignore")
NON_VCS_IGNORE_FILE_NAMES: Final[tuple[str, ...]] = (".ignore",)
GIT_INFO_EXCLUDE: Final[tuple[str, ...]] = (VCS_DIR_NAME, "info", "exclude")

XARGS_PARTIAL_FAILURE: Final[int] = 123
"""Status reported when at least one batched invocation failed (GNU xargs convention)."""

EXIT_OK: Final[int] = 0
EXIT_LINT_FAILED: Final[int] = 1
EXIT_STARTUP_FAILED: Final[int] = 2

DIGEST_CHUNK_SIZE: Final[int] = 1 << 16

__all__ = [
    "CONFIG_FILE_NAME",
    "DIGEST_CHUNK_SIZE",
    "EXIT_LINT_FAILED",
    "EXIT_OK",
    "EXIT_STARTUP_FAILED",
    "GIT_INFO_EXCLUDE",
    "IGNORE_FILE_NAMES",
    "NON_VCS_IGNORE_FILE_NAMES",
    "VCS_DIR_NAME",
    "XARGS_PARTIAL_FAILURE",
]
