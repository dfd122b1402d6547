"""Tests for compiler output parsing."""

from __future__ import annotations

import logging

from cobratask.diagnostics import BuildLog, iter_diagnostics, parse_diagnostic
from cobratask.models import Diagnostic, DiagnosticKind


def test_structured_error_with_column() -> None:
    diagnostic = parse_diagnostic("foo.cs(10,5): error : bad thing")

    assert diagnostic == Diagnostic(
        kind=DiagnosticKind.ERROR,
        message="bad thing",
        file="foo.cs",
        line=10,
        column=5,
    )


def test_structured_warning_without_column_defaults_to_zero() -> None:
    diagnostic = parse_diagnostic("foo.cs(10): warning : watch out")

    assert diagnostic is not None
    assert diagnostic.kind is DiagnosticKind.WARNING
    assert (diagnostic.file, diagnostic.line, diagnostic.column) == ("foo.cs", 10, 0)
    assert diagnostic.message == "watch out"


def test_unparseable_column_defaults_to_zero() -> None:
    diagnostic = parse_diagnostic("src/app.cobra(3,abc): error: unexpected token\r\n")

    assert diagnostic is not None
    assert diagnostic.file == "src/app.cobra"
    assert diagnostic.column == 0
    assert diagnostic.message == "unexpected token"


def test_path_with_spaces_is_kept_whole() -> None:
    diagnostic = parse_diagnostic(r"C:\My Project\main.cobra(12,1): warning: unused variable")

    assert diagnostic is not None
    assert diagnostic.file == r"C:\My Project\main.cobra"


def test_loose_error_and_warning_lines() -> None:
    error = parse_diagnostic("random text error: oops")
    spaced = parse_diagnostic("Compilation error : cannot continue")
    warning = parse_diagnostic("linker warning: duplicate symbol")

    assert error == Diagnostic(kind=DiagnosticKind.ERROR, message="random text error: oops")
    assert spaced is not None and spaced.kind is DiagnosticKind.ERROR
    assert warning is not None and warning.kind is DiagnosticKind.WARNING
    assert warning.file is None and warning.line is None


def test_error_marker_wins_over_warning_marker() -> None:
    diagnostic = parse_diagnostic("warning: promoted to error: stop")
    assert diagnostic is not None
    assert diagnostic.kind is DiagnosticKind.ERROR


def test_informational_and_empty_lines_yield_nothing() -> None:
    assert parse_diagnostic("Just some info") is None
    assert parse_diagnostic("") is None
    assert parse_diagnostic(None) is None
    assert parse_diagnostic("   \n") is None


def test_duplicate_message_notice_is_suppressed() -> None:
    line = "Skipping duplicate message: foo.cobra(4,2): error: repeated"
    assert parse_diagnostic(line) is None


def test_iter_diagnostics_skips_noise() -> None:
    lines = [
        "Compiling 2 files",
        "a.cobra(1): warning: first",
        "Skipping duplicate message: a.cobra(1): warning: first",
        "b.cobra(2,7): error: second",
        "Done",
    ]
    found = list(iter_diagnostics(lines))
    assert [d.format() for d in found] == [
        "a.cobra(1,0): warning: first",
        "b.cobra(2,7): error: second",
    ]


def test_build_log_counts_and_forwards(recording_logger) -> None:  # type: ignore[no-untyped-def]
    log = BuildLog(recording_logger)
    log.log_diagnostic(parse_diagnostic("a.cobra(1,2): warning: careful"))
    assert not log.has_logged_errors

    log.log_diagnostic(parse_diagnostic("compiler error: crashed"))
    log.log_message("Compiling...")

    assert log.warning_count == 1
    assert log.error_count == 1
    assert log.has_logged_errors
    levels = [record[0] for record in recording_logger.records]
    assert levels == [logging.WARNING, logging.ERROR]
    assert recording_logger.records[0][1] == "a.cobra(1,2): warning: careful"
    assert recording_logger.records[0][2]["diagnostic_line"] == 1
    assert recording_logger.records[1][1] == "error: compiler error: crashed"
    assert recording_logger.debug_messages == ["Compiling..."]


def test_file_name_may_contain_parentheses() -> None:
    diagnostic = parse_diagnostic(r"C:\Program Files (x86)\app\main.cobra(10,5): error: bad")

    assert diagnostic == Diagnostic(
        kind=DiagnosticKind.ERROR,
        message="bad",
        file=r"C:\Program Files (x86)\app\main.cobra",
        line=10,
        column=5,
    )


def test_loose_warning_requires_colon_right_after_keyword() -> None:
    assert parse_diagnostic("linker warning : odd") is None
    spaced = parse_diagnostic("linker warning: odd")
    assert spaced is not None and spaced.kind is DiagnosticKind.WARNING
