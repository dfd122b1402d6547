"""Turn Cobra compiler output into structured build-log entries."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, Optional

from .logging import get_logger
from .models import Diagnostic, DiagnosticKind

DIAGNOSTIC_PATTERN = re.compile(
    r"^\s*(?P<file>.+?)\s*"
    r"\((?P<line>\d+)(?:,(?P<column>[^)]*))?\)"
    r"\s*:\s*(?P<kind>error|warning)\s*:\s*"
    r"(?P<message>.*)$"
)

DUPLICATE_MESSAGE_MARKER = "Skipping duplicate message:"

_ERROR_MARKERS = ("error:", "error :")
_WARNING_MARKERS = ("warning:", "warning: ")


def parse_diagnostic(line: Optional[str]) -> Optional[Diagnostic]:
    """Classify one line of compiler output.

    Structured ``file(line[,column]): error|warning : message`` lines win over
    the looser ``error:`` / ``warning:`` substring checks. Anything else,
    including the compiler's duplicate-message notice, yields ``None``.
    """
    if not line:
        return None
    text = line.rstrip("\r\n")
    if not text.strip():
        return None

    match = DIAGNOSTIC_PATTERN.match(text)
    if match is not None:
        file_name = match.group("file")
        if DUPLICATE_MESSAGE_MARKER in file_name:
            return None
        return Diagnostic(
            kind=DiagnosticKind(match.group("kind")),
            message=match.group("message").strip(),
            file=file_name,
            line=int(match.group("line")),
            column=_parse_column(match.group("column")),
        )

    if any(marker in text for marker in _ERROR_MARKERS):
        return Diagnostic(kind=DiagnosticKind.ERROR, message=text.strip())
    if any(marker in text for marker in _WARNING_MARKERS):
        return Diagnostic(kind=DiagnosticKind.WARNING, message=text.strip())
    return None


def iter_diagnostics(lines: Iterable[str]) -> Iterator[Diagnostic]:
    for line in lines:
        diagnostic = parse_diagnostic(line)
        if diagnostic is not None:
            yield diagnostic


def _parse_column(value: Optional[str]) -> int:
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


class BuildLog:
    """Forwards diagnostics to the ``cobratask.build`` logger and keeps counts."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger("build")
        self.error_count = 0
        self.warning_count = 0

    @property
    def has_logged_errors(self) -> bool:
        return self.error_count > 0

    def log_diagnostic(self, diagnostic: Diagnostic) -> None:
        if diagnostic.kind is DiagnosticKind.ERROR:
            self.error_count += 1
            level = logging.ERROR
        else:
            self.warning_count += 1
            level = logging.WARNING
        self.logger.log(
            level,
            "%s",
            diagnostic.format(),
            extra={
                "diagnostic_file": diagnostic.file,
                "diagnostic_line": diagnostic.line,
                "diagnostic_column": diagnostic.column,
            },
        )

    def log_message(self, text: str) -> None:
        self.logger.debug("%s", text)
