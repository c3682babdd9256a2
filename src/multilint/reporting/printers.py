# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Renderers that present linter outcomes to the user."""

from __future__ import annotations

import json
from abc import abstractmethod
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Final, Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from ..console import write_bytes
from ..linter import Outcome
from ..parsing import DiagnosticParser, DiagnosticRecord

MODIFIED_MESSAGE: Final[str] = "modified"


class OutputFormat(StrEnum):
    """Renderer identifiers accepted on the command line."""

    NULL = "null"
    RAW = "raw"
    TEXT = "text"
    JSONL = "jsonl"
    GNU = "gnu"


@runtime_checkable
class Printer(Protocol):
    """Capability shared by every renderer; renderers never mutate outcomes."""

    @abstractmethod
    def start(self, name: str) -> None:
        """Announce that linter ``name`` is about to be considered."""
        raise NotImplementedError

    @abstractmethod
    def no_command(self, name: str) -> None:
        """Report that the command for ``name`` is not installed."""
        raise NotImplementedError

    @abstractmethod
    def no_file(self, name: str) -> None:
        """Report that no file matched the includes of ``name``."""
        raise NotImplementedError

    @abstractmethod
    def error(self, name: str, message: str) -> None:
        """Report a configuration error that prevented ``name`` from running."""
        raise NotImplementedError

    @abstractmethod
    def status(self, name: str, outcome: Outcome, parser: DiagnosticParser) -> None:
        """Report the outcome of running ``name``."""
        raise NotImplementedError


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def collect_records(name: str, outcome: Outcome, parser: DiagnosticParser) -> list[DiagnosticRecord]:
    """Return parsed stdout diagnostics followed by one record per modified file.

    Args:
        name: Linter name used when a record carries no program.
        outcome: Result of the linter run.
        parser: Parser built from the linter's formats.

    Returns:
        list[DiagnosticRecord]: Records ready for rendering.
    """

    records = [record.with_program(name) for record in parser.parse(_decode(outcome.stdout))]
    records.extend(
        DiagnosticRecord(program=name, file=path.as_posix(), message=MODIFIED_MESSAGE) for path in outcome.modified
    )
    return records


class NullPrinter:
    """Discard all output."""

    def __init__(self, console: Console) -> None:
        del console

    def start(self, name: str) -> None:
        del name

    def no_command(self, name: str) -> None:
        del name

    def no_file(self, name: str) -> None:
        del name

    def error(self, name: str, message: str) -> None:
        del name, message

    def status(self, name: str, outcome: Outcome, parser: DiagnosticParser) -> None:
        del name, outcome, parser


class RawPrinter(NullPrinter):
    """Pass the tools' own output bytes through untouched."""

    def __init__(self, console: Console) -> None:
        super().__init__(console)
        self.console = console

    def status(self, name: str, outcome: Outcome, parser: DiagnosticParser) -> None:
        del name, parser
        write_bytes(self.console, outcome.stdout)
        write_bytes(self.console, outcome.stderr)


class TextPrinter:
    """Human-oriented progress lines followed by the tool's output."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def _verdict(self, label: str, style: str) -> None:
        self.console.print(Text(label, style=style))

    def start(self, name: str) -> None:
        line = Text("Running", style="bold green")
        line.append(f" {name} ... ")
        self.console.print(line, end="")

    def no_command(self, name: str) -> None:
        del name
        self._verdict("no command", "yellow")

    def no_file(self, name: str) -> None:
        del name
        self._verdict("skipped", "yellow")

    def error(self, name: str, message: str) -> None:
        del name
        self._verdict(f"error: {message}", "bold red")

    def status(self, name: str, outcome: Outcome, parser: DiagnosticParser) -> None:
        del name, parser
        if outcome.success:
            self._verdict("ok", "green")
        else:
            self._verdict("failed", "red")
        write_bytes(self.console, outcome.stdout)
        write_bytes(self.console, outcome.stderr)
        for path in outcome.modified:
            self.console.out(f"{path.as_posix()}: {MODIFIED_MESSAGE}", highlight=False)


class JsonLinesPrinter(NullPrinter):
    """One JSON object per diagnostic, suitable for machine consumption."""

    def __init__(self, console: Console) -> None:
        super().__init__(console)
        self.console = console

    def error(self, name: str, message: str) -> None:
        record = DiagnosticRecord(program=name, message=f"error: {message}")
        self.console.out(json.dumps(record.model_dump(), ensure_ascii=False), highlight=False)

    def status(self, name: str, outcome: Outcome, parser: DiagnosticParser) -> None:
        for record in collect_records(name, outcome, parser):
            self.console.out(json.dumps(record.model_dump(), ensure_ascii=False), highlight=False)


def format_gnu(record: DiagnosticRecord) -> str:
    """Render ``record`` as ``program:file:line:column: message``, omitting absent parts."""

    location = ":".join(
        str(part) for part in (record.program, record.file, record.line, record.column) if part is not None
    )
    if record.message is None:
        return location
    return f"{location}: {record.message}" if location else record.message


class GnuPrinter(NullPrinter):
    """GNU-style ``program:file:line:column: message`` lines for editors."""

    def __init__(self, console: Console) -> None:
        super().__init__(console)
        self.console = console

    def error(self, name: str, message: str) -> None:
        self.console.out(format_gnu(DiagnosticRecord(program=name, message=f"error: {message}")), highlight=False)

    def status(self, name: str, outcome: Outcome, parser: DiagnosticParser) -> None:
        for record in collect_records(name, outcome, parser):
            self.console.out(format_gnu(record), highlight=False)


PRINTERS: Final[Mapping[OutputFormat, Callable[[Console], Printer]]] = {
    OutputFormat.NULL: NullPrinter,
    OutputFormat.RAW: RawPrinter,
    OutputFormat.TEXT: TextPrinter,
    OutputFormat.JSONL: JsonLinesPrinter,
    OutputFormat.GNU: GnuPrinter,
}


def create_printer(output_format: OutputFormat, console: Console) -> Printer:
    """Return the renderer registered for ``output_format``."""

    return PRINTERS[output_format](console)


__all__ = [
    "GnuPrinter",
    "JsonLinesPrinter",
    "NullPrinter",
    "OutputFormat",
    "Printer",
    "RawPrinter",
    "TextPrinter",
    "collect_records",
    "create_printer",
    "format_gnu",
]
