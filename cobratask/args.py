"""Command-line assembly helpers for the Cobra compiler."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from .models import FileResource

NATIVE_COMPILER_ARG = "-native-compiler-arg:"

# A raw argument runs until unquoted whitespace; "quoted runs" stay together.
_RAW_ARGUMENT = re.compile(r'(?:[^\s"]+|"[^"]*")+')


def split_raw_arguments(text: Optional[str]) -> List[str]:
    """Split a user-supplied argument string, keeping quoted runs intact.

    Quote characters are kept in the tokens. Unbalanced quotes never raise.
    """
    if not text:
        return []
    return _RAW_ARGUMENT.findall(text)


class CommandLineBuilder:
    """Accumulates switches for one compiler invocation.

    Every ``append_*`` method is a no-op when handed ``None`` so that the
    compiler's own defaults apply unless an option is set explicitly.
    ``text`` is the quoted command line used for display and for Windows
    launches; ``args`` holds the same switches as an argument vector.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._args: List[str] = []

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        return " ".join(self._parts)

    @property
    def args(self) -> List[str]:
        return list(self._args)

    def _add(self, display: str, argument: str) -> None:
        self._parts.append(display)
        self._args.append(argument)

    def append_switch(self, switch: str) -> None:
        self._add(switch, switch)

    def append_text_unquoted(self, text: Optional[str]) -> None:
        if text is None or not text.strip():
            return
        self._parts.append(text.strip())
        self._args.extend(token.replace('"', "") for token in split_raw_arguments(text))

    def append_file_name(self, path: Optional[str]) -> None:
        if path is None:
            return
        self._add(_quote(path), path)

    def append_switch_if_not_none(self, switch: str, value: Optional[str]) -> None:
        if value is None:
            return
        self._add(switch + _quote(value), switch + value)

    def append_boolean_switch(self, switch: str, flag: bool) -> None:
        self.append_switch_if_not_none(switch, "yes" if flag else "no")

    def append_array_switch(self, switch: str, values: Optional[Sequence[str]]) -> None:
        if values is None:
            return
        for value in values:
            self.append_switch_if_not_none(switch, value)

    def append_resource_switch(
        self, switch: str, resources: Optional[Iterable[FileResource]]
    ) -> None:
        """Forward embedded or linked resources to the native compiler."""
        if resources is None:
            return
        for resource in resources:
            argument = f'\\"{resource.full_path}\\"'
            if resource.display_name:
                argument += f",{resource.display_name}"
            self.append_forwarded_switch(switch, argument)

    def append_forwarded_switch(self, switch: str, value: Optional[str]) -> None:
        """Wrap ``switch`` + ``value`` so the front-end hands it to the native compiler.

        An empty ``value`` is valid and produces a flag-only switch.
        """
        if value is None:
            return
        if " " in value and not value.startswith('\\"'):
            value = f'\\"{value}\\"'
        forwarded = switch + value
        self._add(
            f'{NATIVE_COMPILER_ARG}"{forwarded}"',
            NATIVE_COMPILER_ARG + forwarded.replace('\\"', '"'),
        )

    def append_forwarded_text(self, text: Optional[str]) -> None:
        """Forward a raw argument string, one native argument per token."""
        for token in split_raw_arguments(text):
            escaped = token.replace('"', '\\"')
            self._add(f'{NATIVE_COMPILER_ARG}"{escaped}"', NATIVE_COMPILER_ARG + token)


def _quote(value: str) -> str:
    if " " in value:
        return f'"{value}"'
    return value
