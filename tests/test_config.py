"""Tests for cobratask.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from cobratask.config import (
    CompilerConfig,
    ConfigError,
    load_config,
    normalize_config,
    normalize_performance_quality,
    normalize_target_type,
)
from cobratask.models import FileResource


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, CompilerConfig)
    assert config.root == tmp_path.resolve()
    assert config.output_assembly is None
    assert config.copy_core is None
    assert config.references is None
    assert config.sources is None
    assert config.error_report == "none"


def test_load_config_parses_expected_fields(project_builder) -> None:  # type: ignore[no-untyped-def]
    project_builder.write_config(
        """
        back_end: clr
        debug: pdbonly
        copy_core: yes
        delay_sign: "no"
        embed_version: 1.2.3
        target_type: Library
        output_assembly: bin/Widgets.dll
        performance_quality_option: fast-and-loose
        include_tests: false
        library_directories:
          - lib
          - third party
        references:
          - System.Core.dll
          - path: /opt/libs/MyLib.dll
        resources:
          - path: res/icons.resources
            logical_name: Widgets.Icons
        add_modules: [a.netmodule, b.netmodule]
        error_report: prompt
        sources:
          - src/main.cobra
          - src/widgets.cobra
        """
    )

    config = project_builder.load()
    root = project_builder.path().resolve()

    assert config.back_end == "clr"
    assert config.debug == "pdbonly"
    assert config.copy_core is True
    assert config.delay_sign is False
    assert config.embed_version == "1.2.3"
    assert config.target_type == "lib"
    assert config.output_assembly == "bin/Widgets.dll"
    assert config.performance_quality_option == "custom"
    assert config.include_tests is False
    assert config.include_asserts is None
    assert config.library_directories == ["lib", "third party"]
    assert config.references == [
        FileResource(str(root / "System.Core.dll")),
        FileResource("/opt/libs/MyLib.dll"),
    ]
    assert config.resources == [
        FileResource(str(root / "res" / "icons.resources"), "Widgets.Icons")
    ]
    assert config.add_modules == ["a.netmodule", "b.netmodule"]
    assert config.error_report == "prompt"
    assert [source.name for source in config.sources] == ["main.cobra", "widgets.cobra"]


def test_load_config_accepts_explicit_file(tmp_path: Path) -> None:
    config_file = tmp_path / "release.yml"
    config_file.write_text("debug: 0\noptimize: true\n", encoding="utf-8")

    config = load_config(config_file)

    assert config.debug == "0"
    assert config.optimize is True
    assert config.root == tmp_path.resolve()


def test_load_config_ignores_badly_shaped_values(project_builder) -> None:  # type: ignore[no-untyped-def]
    project_builder.write_config(
        """
        copy_core: maybe
        namespace: [not, a, string]
        references:
          - 42
          - {logical_name: orphan}
          - Good.dll
        """
    )

    config = project_builder.load()

    assert config.copy_core is None
    assert config.namespace is None
    assert [reference.name for reference in config.references] == ["Good.dll"]


def test_load_config_rejects_non_mapping_root(project_builder) -> None:  # type: ignore[no-untyped-def]
    project_builder.write_config("- just\n- a list\n")

    with pytest.raises(ConfigError):
        project_builder.load()


def test_load_config_reports_yaml_errors(project_builder) -> None:  # type: ignore[no-untyped-def]
    project_builder.write_config("sources: [unterminated\n")

    with pytest.raises(ConfigError, match="Failed to parse cobra.yml"):
        project_builder.load()


def test_normalize_target_type() -> None:
    assert normalize_target_type("Library") == "lib"
    assert normalize_target_type("WinExe") == "winexe"
    assert normalize_target_type(None) is None


def test_normalize_performance_quality() -> None:
    assert normalize_performance_quality("Turbo") == "turbo"
    assert normalize_performance_quality("default") == "default"
    assert normalize_performance_quality("fast-and-loose") == "custom"
    assert normalize_performance_quality(None) is None


def test_normalize_config_returns_copy() -> None:
    original = CompilerConfig(target_type="LIBRARY", performance_quality_option="Custom")

    normalized = normalize_config(original)

    assert normalized.target_type == "lib"
    assert normalized.performance_quality_option == "custom"
    assert original.target_type == "LIBRARY"
