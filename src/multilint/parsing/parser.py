# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn free-form linter output into structured diagnostic records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from re import Match, Pattern

from pydantic import BaseModel, ConfigDict

from .formats import compile_format

LOGGER = logging.getLogger(__name__)


class DiagnosticRecord(BaseModel):
    """One diagnostic recovered from tool output; every field is optional."""

    model_config = ConfigDict(frozen=True)

    program: str | None = None
    file: str | None = None
    line: int | None = None
    column: int | None = None
    message: str | None = None

    def with_program(self, program: str) -> DiagnosticRecord:
        """Return a copy whose ``program`` defaults to ``program`` when unset."""

        if self.program is not None:
            return self
        return self.model_copy(update={"program": program})


def _group(match: Match[str], name: str) -> str | None:
    if name not in match.re.groupindex:
        return None
    return match.group(name)


def _int_group(match: Match[str], name: str) -> int | None:
    value = _group(match, name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _to_record(match: Match[str]) -> DiagnosticRecord:
    return DiagnosticRecord(
        program=_group(match, "p"),
        file=_group(match, "f"),
        line=_int_group(match, "l"),
        column=_int_group(match, "c"),
        message=_group(match, "m"),
    )


class DiagnosticParser:
    """Apply an ordered list of compiled formats to tool output."""

    def __init__(self, patterns: Iterable[Pattern[str]] = ()) -> None:
        self.patterns = tuple(patterns)

    @classmethod
    def from_formats(cls, formats: Iterable[str]) -> DiagnosticParser:
        """Compile ``formats`` and build a parser.

        Raises:
            ConfigError: If any format fails to compile.
        """

        return cls(compile_format(fmt) for fmt in formats)

    def parse(self, text: str) -> list[DiagnosticRecord]:
        """Return the diagnostics found in ``text``.

        When several formats match the identical span only the first format's
        capture is kept. Records are ordered by span start, then span end.

        Args:
            text: Decoded tool output.

        Returns:
            list[DiagnosticRecord]: Records in deterministic order; ``program``
            is left unset when the format has no ``%p``.
        """

        by_span: dict[tuple[int, int], Match[str]] = {}
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                by_span.setdefault(match.span(), match)
        records = []
        for span in sorted(by_span):
            match = by_span[span]
            LOGGER.debug("matched %r at %s", match.group(0), span)
            records.append(_to_record(match))
        return records


def parse(patterns: Iterable[Pattern[str]], text: str) -> list[DiagnosticRecord]:
    """Parse ``text`` with ``patterns``; see :meth:`DiagnosticParser.parse`."""

    return DiagnosticParser(patterns).parse(text)


__all__ = ["DiagnosticParser", "DiagnosticRecord", "parse"]
