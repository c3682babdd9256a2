# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for running a single configured linter."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from multilint.config import ConfigError, GlobalConfig, LinterConfig
from multilint.constants import XARGS_PARTIAL_FAILURE
from multilint.linter import Linter

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="relies on POSIX utilities")


def _age(path: Path) -> None:
    os.utime(path, ns=(0, 0))


def test_from_config_puts_global_excludes_first() -> None:
    config = LinterConfig(command="echo", includes=("*.rs",), excludes=("lib.rs",), single_file=True)

    linter = Linter.from_config(config, GlobalConfig(excludes=("target/",)))

    assert linter.excludes == ("target/", "lib.rs")
    assert linter.max_files_per_invocation == 1
    assert linter.work_dir == Path()


def test_selected_files_are_passed_to_command(project: Path) -> None:
    linter = Linter(command="echo", includes=("*.rs",), excludes=("lib.rs",))

    outcome = linter.run(project)

    assert outcome is not None
    assert outcome.success
    assert outcome.stdout == f"{project / 'main.rs'}\n".encode()
    assert outcome.modified == ()


def test_paths_are_relative_to_root(project: Path) -> None:
    linter = Linter(command="echo", includes=("*.rs",))

    assert linter.paths(project) == [Path("lib.rs"), Path("main.rs")]


def test_no_matching_file_skips_run(project: Path) -> None:
    linter = Linter(command="echo", includes=("*.py",))

    assert linter.run(project) is None


def test_without_includes_runs_once_without_files(project: Path) -> None:
    linter = Linter(command="echo", options=("checked",))

    outcome = linter.run(project)

    assert outcome is not None
    assert outcome.stdout == b"checked\n"
    assert outcome.result.invocations == 1


def test_work_dir_sets_child_directory(project: Path) -> None:
    (project / "sub").mkdir()
    (project / "sub" / "inner.txt").write_text("", encoding="utf-8")
    linter = Linter(command="ls", work_dir=Path("sub"))

    outcome = linter.run(project)

    assert outcome is not None
    assert outcome.stdout == b"inner.txt\n"


def test_missing_work_dir_is_a_configuration_error(project: Path) -> None:
    linter = Linter(command="ls", work_dir=Path("absent"))

    with pytest.raises(ConfigError):
        linter.run(project)


def test_exit_status_decides_success(project: Path) -> None:
    failed = Linter(command="false", includes=("*.rs",)).run(project)
    passed = Linter(command="true", includes=("*.rs",)).run(project)

    assert failed is not None
    assert not failed.success
    assert failed.returncode == XARGS_PARTIAL_FAILURE
    assert passed is not None
    assert passed.success


def test_modified_file_fails_the_run(project: Path, touch_path: str) -> None:
    _age(project / "main.rs")
    linter = Linter(command=touch_path, includes=("main.rs",))

    outcome = linter.run(project)

    assert outcome is not None
    assert outcome.returncode == 0
    assert outcome.modified == (Path("main.rs"),)
    assert not outcome.success


def test_hashing_ignores_timestamp_only_changes(project: Path, touch_path: str) -> None:
    _age(project / "main.rs")
    linter = Linter(command=touch_path, includes=("main.rs",), check_hash=True)

    outcome = linter.run(project)

    assert outcome is not None
    assert outcome.modified == ()
    assert outcome.success


def test_missing_command_is_not_executable() -> None:
    assert not Linter(command="multilint-no-such-tool").is_executable()
    assert Linter(command="echo").is_executable()
