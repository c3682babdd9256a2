# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect files modified as a side effect of running a linter.

Detection is observational only: nothing is restored. Without content
hashing the comparison relies on modification timestamps, whose resolution
depends on the platform and filesystem; two writes within one tick are
indistinguishable, so a tool that rewrites a file within the same tick as the
snapshot goes unnoticed. Enable hashing when that matters.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ..constants import DIGEST_CHUNK_SIZE

LOGGER = logging.getLogger(__name__)


class FileSnapshot(BaseModel):
    """Filesystem state captured for one path before a linter runs."""

    model_config = ConfigDict(frozen=True)

    path: Path
    mtime_ns: int
    digest: str | None = None


def file_digest(path: Path) -> str:
    """Return the SHA-256 hex digest of ``path``'s contents."""

    hasher = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(DIGEST_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def take_snapshot(path: Path, *, use_hash: bool) -> FileSnapshot:
    """Capture the current state of ``path``.

    Args:
        path: File to record.
        use_hash: Also record a content digest.

    Returns:
        FileSnapshot: Timestamp and optional digest of ``path``.

    Raises:
        OSError: If ``path`` cannot be read.
    """

    mtime_ns = path.stat().st_mtime_ns
    digest = file_digest(path) if use_hash else None
    return FileSnapshot(path=path, mtime_ns=mtime_ns, digest=digest)


class ChangeDetector:
    """Compare files before and after an external command runs."""

    def __init__(self, *, use_hash: bool) -> None:
        self.use_hash = use_hash

    def capture(self, paths: Iterable[Path]) -> list[FileSnapshot]:
        """Snapshot every path in ``paths``.

        Paths that cannot be read are skipped; there is no prior state to compare.
        """

        snapshots: list[FileSnapshot] = []
        for path in paths:
            try:
                snapshots.append(take_snapshot(path, use_hash=self.use_hash))
            except OSError as exc:
                LOGGER.warning("cannot snapshot %s: %s", path, exc)
        return snapshots

    def is_changed(self, snapshot: FileSnapshot) -> bool:
        """Return whether ``snapshot.path`` differs from its recorded state.

        A path that vanished or can no longer be read counts as changed.
        """

        try:
            current = take_snapshot(snapshot.path, use_hash=self.use_hash)
        except OSError as exc:
            LOGGER.debug("%s changed: %s", snapshot.path, exc)
            return True
        if self.use_hash:
            return current.digest != snapshot.digest
        return current.mtime_ns != snapshot.mtime_ns

    def changed(self, snapshots: Sequence[FileSnapshot]) -> list[Path]:
        """Return the snapshotted paths that changed, preserving snapshot order."""

        return [snapshot.path for snapshot in snapshots if self.is_changed(snapshot)]


__all__ = ["ChangeDetector", "FileSnapshot", "file_digest", "take_snapshot"]
