"""Configuration loading for cobratask (cobra.yml)."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import FileResource

CONFIG_FILE_NAME = "cobra.yml"

TURBO = "turbo"
DEFAULT = "default"
CUSTOM = "custom"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CompilerConfig:
    """Build properties for one compiler invocation.

    ``None`` means "not set": the corresponding switch is left out and the
    compiler's own default applies.
    """

    root: Optional[Path] = None

    # Task settings
    tool_path: Optional[str] = None
    runtime: Optional[str] = None
    working_directory: Optional[str] = None

    # Front-end switches
    back_end: Optional[str] = None
    clr_platform: Optional[str] = None
    clr_profile: Optional[str] = None
    copy_core: Optional[bool] = None
    correct_source: Optional[str] = None
    debug: Optional[str] = None
    delay_sign: Optional[bool] = None
    embed_run_time: Optional[bool] = None
    embed_version: Optional[str] = None
    include_traces: Optional[bool] = None
    keep_intermediate_files: Optional[bool] = None
    key_container: Optional[str] = None
    key_file: Optional[str] = None
    library_directories: Optional[List[str]] = None
    main: Optional[str] = None
    namespace: Optional[str] = None
    native_compiler: Optional[str] = None
    number: Optional[str] = None
    output_assembly: Optional[str] = None
    target_type: Optional[str] = None

    performance_quality_option: Optional[str] = None
    contracts: Optional[str] = None
    include_asserts: Optional[bool] = None
    include_nil_checks: Optional[bool] = None
    include_tests: Optional[bool] = None
    optimize: Optional[bool] = None

    references: Optional[List[FileResource]] = None
    extra_cobra_args: Optional[str] = None

    # Forwarded to the native compiler
    app_config: Optional[str] = None
    base_address: Optional[str] = None
    check_for_overflow_underflow: Optional[bool] = None
    documentation_file: Optional[str] = None
    resources: Optional[List[FileResource]] = None
    file_alignment: Optional[str] = None
    link_resources: Optional[List[FileResource]] = None
    error_report: Optional[str] = "none"
    generate_full_paths: Optional[bool] = None
    add_modules: Optional[List[str]] = None
    module_assembly_name: Optional[str] = None
    win32_icon: Optional[str] = None
    no_win32_manifest: Optional[bool] = None
    win32_manifest: Optional[str] = None
    win32_resource: Optional[str] = None
    extra_native_args: Optional[str] = None

    sources: Optional[List[FileResource]] = None


_STR_FIELDS = (
    "tool_path",
    "runtime",
    "working_directory",
    "back_end",
    "clr_platform",
    "clr_profile",
    "correct_source",
    "debug",
    "embed_version",
    "key_container",
    "key_file",
    "main",
    "namespace",
    "native_compiler",
    "number",
    "output_assembly",
    "target_type",
    "performance_quality_option",
    "contracts",
    "extra_cobra_args",
    "app_config",
    "base_address",
    "documentation_file",
    "file_alignment",
    "error_report",
    "module_assembly_name",
    "win32_icon",
    "win32_manifest",
    "win32_resource",
    "extra_native_args",
)

_BOOL_FIELDS = (
    "copy_core",
    "delay_sign",
    "embed_run_time",
    "include_traces",
    "keep_intermediate_files",
    "include_asserts",
    "include_nil_checks",
    "include_tests",
    "optimize",
    "check_for_overflow_underflow",
    "generate_full_paths",
    "no_win32_manifest",
)

_STR_LIST_FIELDS = ("library_directories", "add_modules")

_RESOURCE_FIELDS = ("references", "resources", "link_resources", "sources")


def normalize_target_type(value: Optional[str]) -> Optional[str]:
    """Lower-case the target type and accept ``library`` as an alias for ``lib``."""
    if value is None:
        return None
    lowered = value.strip().lower()
    return "lib" if lowered == "library" else lowered


def normalize_performance_quality(value: Optional[str]) -> Optional[str]:
    """Collapse any value other than ``turbo`` or ``default`` to ``custom``."""
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in (TURBO, DEFAULT):
        return lowered
    return CUSTOM


def normalize_config(config: CompilerConfig) -> CompilerConfig:
    return dataclasses.replace(
        config,
        target_type=normalize_target_type(config.target_type),
        performance_quality_option=normalize_performance_quality(
            config.performance_quality_option
        ),
    )


def load_config(config_path: Path) -> CompilerConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CompilerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    values: Dict[str, Any] = {"root": root}
    for name in _STR_FIELDS:
        if name in data:
            values[name] = _as_str(data.get(name))
    for name in _BOOL_FIELDS:
        if name in data:
            values[name] = _as_bool(data.get(name))
    for name in _STR_LIST_FIELDS:
        if name in data:
            values[name] = _as_str_list(data.get(name))
    for name in _RESOURCE_FIELDS:
        if name in data:
            values[name] = _as_resources(data.get(name), root)

    return normalize_config(CompilerConfig(**values))


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return None


def _as_resources(value: Any, root: Path) -> Optional[List[FileResource]]:
    if value is None:
        return None
    items = [value] if isinstance(value, (str, dict)) else value
    if not isinstance(items, Sequence):
        return None
    resources: List[FileResource] = []
    for item in items:
        if isinstance(item, str):
            path, logical_name = item, None
        elif isinstance(item, dict) and isinstance(item.get("path"), str):
            path, logical_name = item["path"], _as_str(item.get("logical_name"))
        else:
            continue
        resources.append(FileResource(_anchor(path, root), logical_name))
    return resources


def _anchor(path: str, root: Path) -> str:
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return str(candidate)
    return str(root / candidate)
