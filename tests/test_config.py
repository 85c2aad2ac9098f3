"""Tests for wth.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from wth.config import ConfigError, GitConfig, RedFlagConfig, ScanConfig, WthConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, WthConfig)
    assert config.root == tmp_path.resolve()
    assert config.scan == ScanConfig()
    assert config.scan.max_depth == 3
    assert config.scan.dependency_depth == 5
    assert config.red_flags == RedFlagConfig()
    assert config.red_flags.max_flags == 12
    assert config.red_flags.stale_todo_days == 90
    assert config.git == GitConfig()
    assert config.git.log_limit == 50


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".wth.yml"
    config_file.write_text(
        """
scan:
  max_depth: 4
  dependency_depth: 6
  ignore_dirs:
    - generated
    - tmp
  ignore_files: [secrets.json]
red_flags:
  max_flags: 20
  massive_file_lines: 500
  log_statement_limit: 2
  stale_todo_days: 30
  blame_workers: 2
git:
  timeout: 1.5
  log_limit: 10
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.scan.max_depth == 4
    assert config.scan.dependency_depth == 6
    assert config.scan.ignore_dirs == ["generated", "tmp"]
    assert config.scan.ignore_files == ["secrets.json"]
    assert config.red_flags.max_flags == 20
    assert config.red_flags.massive_file_lines == 500
    assert config.red_flags.log_statement_limit == 2
    assert config.red_flags.stale_todo_days == 30
    assert config.red_flags.blame_workers == 2
    assert config.git.timeout == pytest.approx(1.5)
    assert config.git.log_limit == 10


def test_load_config_ignores_invalid_values(tmp_path: Path) -> None:
    (tmp_path / ".wth.yml").write_text(
        "scan:\n  max_depth: -1\ngit:\n  timeout: soon\n  log_limit: true\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.scan.max_depth == 3
    assert config.git.timeout == pytest.approx(5.0)
    assert config.git.log_limit == 50


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".wth.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).scan.max_depth == 3


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".wth.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_wraps_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".wth.yml").write_text("scan: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)
    assert ".wth.yml" in str(excinfo.value)


def test_load_config_wraps_invalid_utf8(tmp_path: Path) -> None:
    (tmp_path / ".wth.yml").write_bytes(b"scan:\n  max_depth: 2 # caf\xe9\n")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)
    assert "UTF-8" in str(excinfo.value)
