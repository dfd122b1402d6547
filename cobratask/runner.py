"""Launch the compiler and stream its output back line by line."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Callable, Optional, Union

from .args import CommandLineBuilder
from .logging import get_logger

logger = get_logger("runner")

LineCallback = Callable[[str], None]
ProcessRunner = Callable[[str, CommandLineBuilder, LineCallback, Optional[Path]], int]


def run_process(
    executable: str,
    command_line: CommandLineBuilder,
    on_line: LineCallback,
    cwd: Optional[Path] = None,
) -> int:
    """Run ``executable`` with ``command_line`` and feed each output line to ``on_line``.

    POSIX launches use the builder's argument vector so paths reach the
    compiler unchanged; Windows receives the quoted command-line text.

    stderr is merged into stdout so lines arrive in the order the compiler
    wrote them. Returns the process exit code.
    """
    args: Union[str, list]
    if os.name == "nt":
        args = f'"{executable}" {command_line.text}'
    else:
        args = [executable, *command_line.args]

    logger.debug("Launching %s in %s", executable, cwd or Path.cwd())
    try:
        process = subprocess.Popen(
            args,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise RuntimeError(
            f"Unable to locate '{executable}'. Install Cobra or set tool_path in cobra.yml."
        ) from exc

    with process.stdout:
        for line in process.stdout:
            on_line(line.rstrip("\r\n"))
    return process.wait()
