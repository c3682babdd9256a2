# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Outcome renderers."""

from __future__ import annotations

from .printers import OutputFormat, Printer, create_printer

__all__ = ["OutputFormat", "Printer", "create_printer"]
