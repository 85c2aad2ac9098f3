"""Configuration loading for wth (.wth.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".wth.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """Traversal bounds and extra ignore names."""

    max_depth: int = 3
    dependency_depth: int = 5
    ignore_dirs: List[str] = field(default_factory=list)
    ignore_files: List[str] = field(default_factory=list)


@dataclass
class RedFlagConfig:
    """Thresholds for the red-flag heuristics."""

    max_flags: int = 12
    massive_file_lines: int = 1000
    log_statement_limit: int = 5
    stale_todo_days: int = 90
    blame_workers: int = 8


@dataclass
class GitConfig:
    """Bounds for git subprocess calls."""

    timeout: float = 5.0
    log_limit: int = 50


@dataclass
class WthConfig:
    """Represents the settings defined in .wth.yml."""

    root: Path
    scan: ScanConfig = field(default_factory=ScanConfig)
    red_flags: RedFlagConfig = field(default_factory=RedFlagConfig)
    git: GitConfig = field(default_factory=GitConfig)


def load_config(config_path: Path) -> WthConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WthConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        scan.max_depth = _as_positive_int(scan_data.get("max_depth"), scan.max_depth)
        scan.dependency_depth = _as_positive_int(
            scan_data.get("dependency_depth"), scan.dependency_depth
        )
        scan.ignore_dirs = _as_str_list(scan_data.get("ignore_dirs"))
        scan.ignore_files = _as_str_list(scan_data.get("ignore_files"))

    red_flags = RedFlagConfig()
    flag_data = _as_dict(data.get("red_flags"))
    if flag_data:
        red_flags.max_flags = _as_positive_int(flag_data.get("max_flags"), red_flags.max_flags)
        red_flags.massive_file_lines = _as_positive_int(
            flag_data.get("massive_file_lines"), red_flags.massive_file_lines
        )
        red_flags.log_statement_limit = _as_positive_int(
            flag_data.get("log_statement_limit"), red_flags.log_statement_limit
        )
        red_flags.stale_todo_days = _as_positive_int(
            flag_data.get("stale_todo_days"), red_flags.stale_todo_days
        )
        red_flags.blame_workers = _as_positive_int(
            flag_data.get("blame_workers"), red_flags.blame_workers
        )

    git = GitConfig()
    git_data = _as_dict(data.get("git"))
    if git_data:
        timeout = _as_float(git_data.get("timeout"))
        if timeout is not None and timeout > 0:
            git.timeout = timeout
        git.log_limit = _as_positive_int(git_data.get("log_limit"), git.log_limit)

    return WthConfig(root=root, scan=scan, red_flags=red_flags, git=git)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if isinstance(value, str):
        try:
            parsed = int(value)
        except ValueError:
            return default
        return parsed if parsed > 0 else default
    return default


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
