"""Implicitly linked assemblies that must not be passed as explicit references."""

from __future__ import annotations

import os
from enum import Enum
from typing import Iterable, List, Mapping, Optional

from .logging import get_logger
from .models import FileResource

logger = get_logger("references")


class Runtime(str, Enum):
    DOTNET = "dotnet"
    MONO = "mono"


_ASSEMBLY_EXTENSIONS = (".dll", ".exe")

_DOTNET_IMPLICIT = frozenset(
    {
        "mscorlib",
        "System",
        "System.Core",
        "Cobra.Core",
        "Microsoft.CSharp",
    }
)

# Re-declaring any of these makes the C# back end fail with a duplicate
# assembly identity. Matching is by short name only, so a custom build of
# one of these libraries is dropped as well.
IMPLICIT_REFERENCES: Mapping[Runtime, frozenset] = {
    Runtime.DOTNET: _DOTNET_IMPLICIT,
    Runtime.MONO: _DOTNET_IMPLICIT | {"System.Xml"},
}


def detect_runtime(platform: str = os.name) -> Runtime:
    return Runtime.DOTNET if platform == "nt" else Runtime.MONO


def parse_runtime(value: Optional[str], platform: str = os.name) -> Runtime:
    """Map a configured runtime name to :class:`Runtime`, detecting it for ``auto``."""
    if value:
        lowered = value.strip().lower()
        for runtime in Runtime:
            if runtime.value == lowered:
                return runtime
    return detect_runtime(platform)


def assembly_name(reference: FileResource) -> str:
    """Short assembly name: the file name minus a '.dll' or '.exe' suffix.

    ``System.Core`` and ``System.Core.dll`` both give ``System.Core``.
    """
    stem, extension = os.path.splitext(reference.name)
    if extension.lower() in _ASSEMBLY_EXTENSIONS:
        return stem
    return reference.name


def filter_implicit_references(
    references: Iterable[FileResource], runtime: Runtime
) -> List[FileResource]:
    implicit = IMPLICIT_REFERENCES[runtime]
    kept: List[FileResource] = []
    for reference in references:
        if assembly_name(reference) in implicit:
            logger.debug("Dropping implicit reference %s", reference.path)
            continue
        kept.append(reference)
    return kept
