# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for side-effect detection."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from multilint.execution import ChangeDetector
from multilint.execution.changes import file_digest, take_snapshot


def _bump_mtime(path: Path) -> None:
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))


def test_unchanged_file_is_not_reported(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("alpha\n", encoding="utf-8")
    detector = ChangeDetector(use_hash=False)

    snapshots = detector.capture([target])

    assert detector.changed(snapshots) == []


def test_timestamp_change_is_reported(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("alpha\n", encoding="utf-8")
    detector = ChangeDetector(use_hash=False)
    snapshots = detector.capture([target])

    _bump_mtime(target)

    assert detector.changed(snapshots) == [target]


def test_hash_ignores_touch_without_content_change(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("alpha\n", encoding="utf-8")
    detector = ChangeDetector(use_hash=True)
    snapshots = detector.capture([target])

    _bump_mtime(target)

    assert detector.changed(snapshots) == []


def test_hash_detects_content_change(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("alpha\n", encoding="utf-8")
    detector = ChangeDetector(use_hash=True)
    snapshots = detector.capture([target])

    target.write_text("beta\n", encoding="utf-8")

    assert detector.changed(snapshots) == [target]


def test_deleted_file_counts_as_changed(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("alpha\n", encoding="utf-8")
    detector = ChangeDetector(use_hash=False)
    snapshots = detector.capture([target])

    target.unlink()

    assert detector.changed(snapshots) == [target]


def test_capture_skips_unreadable_paths(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    present = tmp_path / "present.txt"
    present.write_text("", encoding="utf-8")
    detector = ChangeDetector(use_hash=False)

    snapshots = detector.capture([tmp_path / "missing.txt", present])

    assert [snapshot.path for snapshot in snapshots] == [present]
    assert "cannot snapshot" in caplog.text


def test_changed_preserves_snapshot_order(tmp_path: Path) -> None:
    first = tmp_path / "b.txt"
    second = tmp_path / "a.txt"
    for path in (first, second):
        path.write_text("x", encoding="utf-8")
    detector = ChangeDetector(use_hash=False)
    snapshots = detector.capture([first, second])

    _bump_mtime(second)
    _bump_mtime(first)

    assert detector.changed(snapshots) == [first, second]


def test_snapshot_records_digest_only_when_hashing(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_bytes(b"")

    assert take_snapshot(target, use_hash=False).digest is None
    assert take_snapshot(target, use_hash=True).digest == file_digest(target)
    assert file_digest(target) == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
