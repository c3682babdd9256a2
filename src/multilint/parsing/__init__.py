# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error-format compilation and diagnostic parsing."""

from __future__ import annotations

from .formats import compile_format, format_to_pattern
from .parser import DiagnosticParser, DiagnosticRecord, parse

__all__ = ["DiagnosticParser", "DiagnosticRecord", "compile_format", "format_to_pattern", "parse"]
