# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for directory traversal and file selection."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from multilint.discovery import OverrideMatcher, TreeWalker, is_submodule, walk
from multilint.discovery.walker import find_repository_top


def _make_repo(root: Path) -> Path:
    (root / ".git" / "info").mkdir(parents=True)
    return root


def test_walk_selects_included_files_in_order(project: Path) -> None:
    (project / "src").mkdir()
    (project / "src" / "util.rs").write_text("", encoding="utf-8")

    found = walk(project, OverrideMatcher(["*.rs"], []), exclude_submodules=True)

    assert found == [Path("lib.rs"), Path("main.rs"), Path("src/util.rs")]


def test_walk_applies_excludes(project: Path) -> None:
    found = walk(project, OverrideMatcher(["*.rs"], ["lib.rs"]), exclude_submodules=True)

    assert found == [Path("main.rs")]


def test_walk_never_yields_vcs_metadata(project: Path) -> None:
    _make_repo(project)
    (project / ".git" / "config").write_text("[core]\n", encoding="utf-8")

    found = walk(project, OverrideMatcher(["*"], []), exclude_submodules=True)

    assert Path("main.rs") in found
    assert all(".git" not in path.parts for path in found)


def test_submodules_are_pruned_when_requested(project: Path) -> None:
    _make_repo(project)
    submodule = project / "vendor"
    submodule.mkdir()
    (submodule / ".git").write_text("gitdir: ../.git/modules/vendor\n", encoding="utf-8")
    (submodule / "main.rs").write_text("", encoding="utf-8")
    matcher = OverrideMatcher(["main.rs"], [])

    assert is_submodule(submodule)
    assert not is_submodule(project)
    assert walk(project, matcher, exclude_submodules=True) == [Path("main.rs")]
    assert walk(project, matcher, exclude_submodules=False) == [Path("main.rs"), Path("vendor/main.rs")]


def test_gitignore_is_honoured_inside_repository(project: Path) -> None:
    _make_repo(project)
    (project / ".gitignore").write_text("lib.rs\ntarget/\n", encoding="utf-8")
    (project / "target").mkdir()
    (project / "target" / "gen.rs").write_text("", encoding="utf-8")

    found = walk(project, OverrideMatcher(["*.rs"], []), exclude_submodules=True)

    assert found == [Path("main.rs")]


def test_gitignore_is_ignored_outside_repository(project: Path) -> None:
    (project / ".gitignore").write_text("lib.rs\n", encoding="utf-8")

    found = walk(project, OverrideMatcher(["*.rs"], []), exclude_submodules=True)

    assert found == [Path("lib.rs"), Path("main.rs")]


def test_ignore_file_applies_everywhere(project: Path) -> None:
    (project / ".ignore").write_text("main.rs\n", encoding="utf-8")

    found = walk(project, OverrideMatcher(["*.rs"], []), exclude_submodules=True)

    assert found == [Path("lib.rs")]


def test_nested_ignore_file_can_reinclude(project: Path) -> None:
    _make_repo(project)
    (project / ".gitignore").write_text("*.gen.rs\n", encoding="utf-8")
    nested = project / "keep"
    nested.mkdir()
    (nested / ".gitignore").write_text("!wanted.gen.rs\n", encoding="utf-8")
    (nested / "wanted.gen.rs").write_text("", encoding="utf-8")
    (nested / "other.gen.rs").write_text("", encoding="utf-8")
    (project / "top.gen.rs").write_text("", encoding="utf-8")

    found = walk(project, OverrideMatcher(["*.gen.rs"], []), exclude_submodules=True)

    assert found == [Path("keep/wanted.gen.rs")]


def test_info_exclude_is_honoured(project: Path) -> None:
    _make_repo(project)
    (project / ".git" / "info" / "exclude").write_text("README.md\n", encoding="utf-8")

    found = walk(project, OverrideMatcher(["*"], []), exclude_submodules=True)

    assert Path("README.md") not in found
    assert Path("main.rs") in found


def test_ancestor_gitignore_applies_to_subdirectory_root(project: Path) -> None:
    _make_repo(project)
    (project / ".gitignore").write_text("*.bak\n", encoding="utf-8")
    child = project / "child"
    child.mkdir()
    (child / "a.rs").write_text("", encoding="utf-8")
    (child / "a.rs.bak").write_text("", encoding="utf-8")

    assert find_repository_top(child.resolve()) == project.resolve()
    assert walk(child, OverrideMatcher(["*"], []), exclude_submodules=True) == [Path("a.rs")]


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks require privileges on Windows")
def test_symlinks_are_not_followed(project: Path) -> None:
    outside = project.parent / "outside"
    outside.mkdir()
    (outside / "far.rs").write_text("", encoding="utf-8")
    os.symlink(outside, project / "linked")
    os.symlink(project / "main.rs", project / "alias.rs")

    found = walk(project, OverrideMatcher(["*.rs"], []), exclude_submodules=True)

    assert found == [Path("lib.rs"), Path("main.rs")]


def test_iter_files_is_lazy(project: Path) -> None:
    walker = TreeWalker(OverrideMatcher(["*.rs"], []), exclude_submodules=True)

    iterator = walker.iter_files(project)

    assert next(iterator) == Path("lib.rs")
