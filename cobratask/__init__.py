"""Drive the Cobra compiler from build properties and report its diagnostics."""

from .args import CommandLineBuilder
from .config import CompilerConfig, ConfigError, load_config
from .diagnostics import BuildLog, parse_diagnostic
from .models import Diagnostic, DiagnosticKind, FileResource
from .task import CobraCompileTask

__all__ = [
    "BuildLog",
    "CobraCompileTask",
    "CommandLineBuilder",
    "CompilerConfig",
    "ConfigError",
    "Diagnostic",
    "DiagnosticKind",
    "FileResource",
    "load_config",
    "parse_diagnostic",
]
