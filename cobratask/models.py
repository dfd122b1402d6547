"""Core data models shared across cobratask components."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class FileResource:
    """A source, reference or resource item handed over by the build orchestrator."""

    path: str
    logical_name: Optional[str] = None

    @property
    def full_path(self) -> str:
        return os.path.abspath(self.path)

    @property
    def name(self) -> str:
        """Short file name including the extension."""
        return os.path.basename(self.path)

    @property
    def display_name(self) -> str:
        return self.logical_name or self.name


class DiagnosticKind(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """One error or warning reported by the compiler."""

    kind: DiagnosticKind
    message: str
    file: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def is_structured(self) -> bool:
        return self.file is not None

    def format(self) -> str:
        if self.is_structured:
            return (
                f"{self.file}({self.line},{self.column or 0}): "
                f"{self.kind.value}: {self.message}"
            )
        return f"{self.kind.value}: {self.message}"
