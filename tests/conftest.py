# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from pathlib import Path

import pytest

from multilint.logging import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo handler changes made by the CLI so ``caplog`` keeps seeing records."""

    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project root holding two Rust sources and a README."""

    root = tmp_path / "project"
    root.mkdir()
    (root / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
    (root / "lib.rs").write_text("pub fn lib() {}\n", encoding="utf-8")
    (root / "README.md").write_text("# project\n", encoding="utf-8")
    return root


@pytest.fixture
def touch_path() -> str:
    """Return the absolute path of ``touch`` or skip when it is unavailable."""

    resolved = shutil.which("touch")
    if resolved is None:
        pytest.skip("touch is not available")
    return resolved
