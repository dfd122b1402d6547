"""CLI entrypoints for cobratask commands."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .diagnostics import iter_diagnostics
from .logging import configure_logging
from .models import DiagnosticKind
from .task import CobraCompileTask


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cobratask",
        description="Drive the Cobra compiler from a cobra.yml build description.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Compile the project described by cobra.yml.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory or config file (defaults to current directory).",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the compiler command line without running it.",
    )
    build_parser.add_argument(
        "--tool-path",
        default=None,
        help="Compiler executable or the directory containing it.",
    )
    build_parser.add_argument(
        "--log-file",
        dest="transcript",
        type=Path,
        default=None,
        help="Write the full compiler transcript, including non-diagnostic lines, to this file.",
    )

    diagnose_parser = subparsers.add_parser(
        "diagnose",
        help="Extract errors and warnings from a saved compiler log.",
    )
    _add_verbose_option(diagnose_parser, suppress_default=True)
    diagnose_parser.add_argument("log_file", help="Path to the compiler output.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cobratask commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=getattr(args, "transcript", None),
    )

    if args.command == "build":
        try:
            config = load_config(Path(args.path))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        if args.tool_path:
            config = dataclasses.replace(config, tool_path=args.tool_path)
        task = CobraCompileTask(config)
        if args.dry_run:
            print(f"{task.generate_full_path_to_tool()} {task.generate_command_line()}")
            return
        try:
            succeeded = task.execute()
        except RuntimeError as exc:
            parser.exit(1, f"cobratask build failed: {exc}\nRun with --verbose for more details.\n")
        log = task.log
        print(f"{log.error_count} error(s), {log.warning_count} warning(s)")
        if not succeeded:
            parser.exit(1, "Build failed\n")
    elif args.command == "diagnose":
        log_path = Path(args.log_file)
        try:
            text = log_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            parser.exit(1, f"Cannot read {log_path}: {exc}\n")
        has_errors = False
        for diagnostic in iter_diagnostics(text.splitlines()):
            has_errors = has_errors or diagnostic.kind is DiagnosticKind.ERROR
            print(diagnostic.format())
        if has_errors:
            parser.exit(1)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
