# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for diagnostic extraction from tool output."""

from __future__ import annotations

from multilint.parsing import DiagnosticParser, DiagnosticRecord, compile_format, parse


def test_gnu_style_output_is_parsed() -> None:
    parser = DiagnosticParser.from_formats(["^%p:%f:%l:%c: %m$"])

    records = parser.parse("clippy:src/main.rs:3:7: unused variable\n")

    assert records == [
        DiagnosticRecord(program="clippy", file="src/main.rs", line=3, column=7, message="unused variable"),
    ]


def test_records_are_ordered_by_position_across_formats() -> None:
    text = "W a.rs: late warning\nE b.rs:2\n"
    parser = DiagnosticParser.from_formats(["^E %f:%l$", "^W %f: %m$"])

    records = parser.parse(text)

    assert [record.file for record in records] == ["a.rs", "b.rs"]
    assert records[0].message == "late warning"
    assert records[1].line == 2
    assert records[1].message is None


def test_identical_span_keeps_first_format() -> None:
    parser = DiagnosticParser.from_formats(["^%f:%l$", "^%f:%m$"])

    records = parser.parse("a.rs:12\n")

    assert records == [DiagnosticRecord(file="a.rs", line=12)]


def test_missing_program_defaults_to_linter_name() -> None:
    record = DiagnosticRecord(file="a.rs")

    assert record.with_program("rustfmt").program == "rustfmt"
    assert DiagnosticRecord(program="clippy").with_program("rustfmt").program == "clippy"


def test_empty_input_and_no_formats_yield_nothing() -> None:
    assert DiagnosticParser.from_formats(["^%f:%l: %m$"]).parse("") == []
    assert DiagnosticParser().parse("a.rs:1: oops\n") == []


def test_module_level_parse_accepts_compiled_patterns() -> None:
    records = parse([compile_format("^%f:%l: %m$")], "x.rs:4: boom\n")

    assert records == [DiagnosticRecord(file="x.rs", line=4, message="boom")]
