"""Compile task that drives the Cobra compiler from build properties."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from .args import CommandLineBuilder
from .config import DEFAULT, TURBO, CompilerConfig, normalize_config
from .diagnostics import BuildLog, parse_diagnostic
from .logging import get_logger
from .references import filter_implicit_references, parse_runtime
from .runner import ProcessRunner, run_process
from .toolpath import DEFAULT_TOOL, resolve_tool_path, tool_executable_name

logger = get_logger("task")

# Values the compiler assumes when a custom performance/quality switch is unset.
_CUSTOM_DEFAULTS = {
    "contracts": "inline",
    "include_asserts": True,
    "include_nil_checks": True,
    "include_tests": True,
    "optimize": False,
}


class CobraCompileTask:
    """Builds a ``cobra -compile`` command line and reports its diagnostics."""

    def __init__(
        self,
        config: CompilerConfig,
        *,
        log: Optional[BuildLog] = None,
        runner: Optional[ProcessRunner] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        exists: Callable[[str], bool] = os.path.isfile,
        isdir: Callable[[str], bool] = os.path.isdir,
        platform: str = os.name,
        environ: Mapping[str, str] = os.environ,
    ) -> None:
        self.config = normalize_config(config)
        self.log = log or BuildLog()
        self._runner = runner or run_process
        self._which = which
        self._exists = exists
        self._isdir = isdir
        self._platform = platform
        self._environ = environ

    @property
    def tool_name(self) -> str:
        return tool_executable_name(DEFAULT_TOOL, self._platform)

    def generate_full_path_to_tool(self) -> str:
        return resolve_tool_path(
            self.config.tool_path,
            tool=DEFAULT_TOOL,
            platform=self._platform,
            environ=self._environ,
            which=self._which,
            exists=self._exists,
            isdir=self._isdir,
        )

    def generate_command_line(self) -> str:
        return self.build_command_line().text

    def build_command_line(self) -> CommandLineBuilder:
        config = self.config
        builder = CommandLineBuilder()
        builder.append_switch("-compile")

        builder.append_switch_if_not_none("-back-end:", config.back_end)
        builder.append_switch_if_not_none("-clr-platform:", config.clr_platform)
        builder.append_switch_if_not_none("-clr-profile:", config.clr_profile)
        _append_bool(builder, "-copy-core:", config.copy_core)
        builder.append_switch_if_not_none("-correct-source:", config.correct_source)
        builder.append_switch_if_not_none("-debug:", config.debug)
        _append_bool(builder, "-delay-sign:", config.delay_sign)
        _append_bool(builder, "-embed-run-time:", config.embed_run_time)
        builder.append_switch_if_not_none("-embed-version:", config.embed_version)
        _append_bool(builder, "-include-traces:", config.include_traces)
        _append_bool(builder, "-keep-intermediate-files:", config.keep_intermediate_files)
        builder.append_switch_if_not_none("-key-container:", config.key_container)
        builder.append_switch_if_not_none("-key-file:", config.key_file)
        builder.append_array_switch("-library-directory:", config.library_directories)
        builder.append_switch_if_not_none("-main:", config.main)
        builder.append_switch_if_not_none("-namespace:", config.namespace)
        builder.append_switch_if_not_none("-native-compiler:", config.native_compiler)
        builder.append_switch_if_not_none("-number:", config.number)
        builder.append_switch_if_not_none("-out:", config.output_assembly)
        builder.append_switch_if_not_none("-target:", config.target_type)

        self._append_performance_quality(builder)

        if config.references is not None:
            runtime = parse_runtime(config.runtime, self._platform)
            references = filter_implicit_references(config.references, runtime)
            builder.append_array_switch(
                "-reference:", [reference.full_path for reference in references]
            )

        builder.append_text_unquoted(config.extra_cobra_args)

        self._append_native_compiler_args(builder)

        for source in config.sources or ():
            builder.append_file_name(source.full_path)

        logger.debug("Command line: %s", builder.text)
        return builder

    def _append_performance_quality(self, builder: CommandLineBuilder) -> None:
        config = self.config
        mode = config.performance_quality_option
        if mode is None or mode == DEFAULT:
            return
        if mode == TURBO:
            builder.append_switch("-turbo")
            return

        def pick(name: str) -> Union[str, bool]:
            value = getattr(config, name)
            return _CUSTOM_DEFAULTS[name] if value is None else value

        builder.append_switch_if_not_none("-contracts:", pick("contracts"))
        builder.append_boolean_switch("-include-asserts:", pick("include_asserts"))
        builder.append_boolean_switch("-include-nil-checks:", pick("include_nil_checks"))
        builder.append_boolean_switch("-include-tests:", pick("include_tests"))
        builder.append_boolean_switch("-optimize:", pick("optimize"))

    def _append_native_compiler_args(self, builder: CommandLineBuilder) -> None:
        config = self.config
        builder.append_forwarded_switch("/appConfig:", config.app_config)
        builder.append_forwarded_switch("/baseaddress:", config.base_address)
        if config.check_for_overflow_underflow is not None:
            builder.append_forwarded_switch(
                "/checked", "+" if config.check_for_overflow_underflow else "-"
            )
        builder.append_forwarded_switch("/doc:", config.documentation_file)
        builder.append_resource_switch("/resource:", config.resources)
        builder.append_forwarded_switch("/filealign:", config.file_alignment)
        builder.append_resource_switch("/linkresource:", config.link_resources)
        builder.append_forwarded_switch("/errorreport:", config.error_report)
        if config.generate_full_paths:
            builder.append_forwarded_switch("/fullpaths", "")
        if config.add_modules:
            builder.append_forwarded_switch("/addmodule:", ";".join(config.add_modules))
        builder.append_forwarded_switch("/moduleassemblyname:", config.module_assembly_name)
        builder.append_forwarded_switch("/win32icon:", config.win32_icon)
        # Both manifest switches are passed through when set; the native
        # compiler reports the conflict.
        if config.no_win32_manifest:
            builder.append_forwarded_switch("/nowin32manifest", "")
        builder.append_forwarded_switch("/win32manifest:", config.win32_manifest)
        builder.append_forwarded_switch("/win32res:", config.win32_resource)
        builder.append_forwarded_text(config.extra_native_args)

    def log_event_from_text(self, line: str) -> None:
        """Handle one line of compiler output."""
        diagnostic = parse_diagnostic(line)
        if diagnostic is None:
            if line:
                self.log.log_message(line)
            return
        self.log.log_diagnostic(diagnostic)

    def execute(self) -> bool:
        """Run the compiler; True when it exits cleanly and reported no errors."""
        tool = self.generate_full_path_to_tool()
        command_line = self.build_command_line()
        logger.info("%s %s", tool, command_line.text)
        cwd = self.config.root
        if self.config.working_directory:
            cwd = (cwd or Path.cwd()) / self.config.working_directory
        exit_code = self._runner(tool, command_line, self.log_event_from_text, cwd)
        if exit_code != 0:
            logger.error("%s exited with code %d", self.tool_name, exit_code)
        return exit_code == 0 and not self.log.has_logged_errors


def _append_bool(builder: CommandLineBuilder, switch: str, flag: Optional[bool]) -> None:
    if flag is not None:
        builder.append_boolean_switch(switch, flag)
