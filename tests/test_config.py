"""Tests for doccompiler.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from doccompiler.config import ConfigError, DocCompilerConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocCompilerConfig)
    assert config.root == tmp_path.resolve()
    assert config.settings.include_source is False
    assert config.passes.enabled == []
    assert config.logging.level == "info"
    assert config.logging.file is None
    assert config.to_settings() == {"include-source": False}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".doccompiler.yml"
    config_file.write_text(
        """
settings:
  include_source: true
compiler:
  passes:
    - elements-index
    - namespace-tree
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.settings.include_source is True
    assert config.passes.enabled == ["elements-index", "namespace-tree"]
    assert config.to_settings() == {"include-source": True}


def test_load_config_accepts_string_booleans_and_inline_lists(tmp_path: Path) -> None:
    (tmp_path / ".doccompiler.yml").write_text(
        "settings:\n  include_source: 'yes'\ncompiler:\n  passes: [remove-source]\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path / "other.yml")

    assert config.settings.include_source is True
    assert config.passes.enabled == ["remove-source"]


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".doccompiler.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.settings.include_source is False


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".doccompiler.yml").write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".doccompiler.yml").write_text("settings: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_load_config_parses_logging_section(tmp_path: Path) -> None:
    (tmp_path / ".doccompiler.yml").write_text(
        "logging:\n  level: DEBUG\n  file: build/compile.log\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.logging.level == "debug"
    assert config.logging.file == (tmp_path / "build" / "compile.log").resolve()


def test_load_config_rejects_unknown_log_level(tmp_path: Path) -> None:
    (tmp_path / ".doccompiler.yml").write_text("logging:\n  level: loud\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="logging.level"):
        load_config(tmp_path)
