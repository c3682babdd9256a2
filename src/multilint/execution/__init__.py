# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process batching and side-effect detection."""

from __future__ import annotations

from .changes import ChangeDetector, FileSnapshot
from .xargs import ExecutionResult, Xargs, run_batched

__all__ = ["ChangeDetector", "ExecutionResult", "FileSnapshot", "Xargs", "run_batched"]
