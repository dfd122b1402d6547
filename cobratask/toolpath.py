"""Locate the Cobra compiler executable."""

from __future__ import annotations

import ntpath
import os
import posixpath
import shutil
from typing import Callable, Mapping, Optional

from .logging import get_logger

logger = get_logger("toolpath")

DEFAULT_TOOL = "cobra"


def tool_executable_name(tool: str = DEFAULT_TOOL, platform: str = os.name) -> str:
    return f"{tool}.exe" if platform == "nt" else tool


def conventional_install_path(tool: str = DEFAULT_TOOL, platform: str = os.name) -> str:
    if platform == "nt":
        return ntpath.join("C:\\", tool.capitalize(), tool_executable_name(tool, platform))
    return posixpath.join("/usr/local", tool, "bin", tool)


def resolve_tool_path(
    tool_path: Optional[str] = None,
    *,
    tool: str = DEFAULT_TOOL,
    platform: str = os.name,
    environ: Mapping[str, str] = os.environ,
    which: Callable[[str], Optional[str]] = shutil.which,
    exists: Callable[[str], bool] = os.path.isfile,
    isdir: Callable[[str], bool] = os.path.isdir,
) -> str:
    """Return the command used to launch the compiler.

    The bare executable name is returned when the compiler's directory is
    already on ``PATH`` or when nothing could be found; otherwise the full
    path is returned.
    """
    pathmod = ntpath if platform == "nt" else posixpath
    executable = tool_executable_name(tool, platform)
    resolved: Optional[str] = None

    if tool_path:
        candidate = pathmod.join(tool_path, executable) if isdir(tool_path) else tool_path
        if exists(candidate):
            resolved = candidate
        else:
            logger.debug("Ignoring tool_path %s: %s does not exist", tool_path, candidate)

    if resolved is None:
        candidate = conventional_install_path(tool, platform)
        if exists(candidate):
            resolved = candidate
        else:
            logger.debug("No compiler at %s, asking PATH lookup", candidate)
            resolved = which(executable)

    if resolved is None:
        logger.debug("Compiler %s not found, relying on PATH at launch", executable)
        return executable

    directory = pathmod.dirname(resolved)
    if _on_search_path(directory, environ.get("PATH", ""), pathmod):
        return executable
    return resolved


def _on_search_path(directory: str, search_path: str, pathmod) -> bool:
    if not directory:
        return False
    wanted = pathmod.normcase(pathmod.normpath(directory))
    separator = ";" if pathmod is ntpath else ":"
    for entry in search_path.split(separator):
        entry = entry.strip()
        if entry and pathmod.normcase(pathmod.normpath(entry)) == wanted:
            return True
    return False
