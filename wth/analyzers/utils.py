"""Shared helper utilities for analyzer implementations."""

from __future__ import annotations

import json
import os
import re
import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..logging import get_logger

logger = get_logger("analyzers")

# File extensions the content heuristics read.
SCRIPT_SUFFIXES = (".js", ".jsx", ".ts", ".tsx")
TODO_SUFFIXES = (".js", ".ts", ".jsx", ".tsx", ".py", ".go", ".rs", ".java")

_REQUIREMENT_NAME = re.compile(r"[\s<>=!~;\[@]")


def root_entries(root: Path) -> Set[str]:
    """Return the names directly under ``root``, or an empty set if unlistable."""
    try:
        return set(os.listdir(root))
    except OSError as exc:
        logger.debug("Could not list %s: %s", root, exc)
        return set()


def read_text(path: str | Path) -> Optional[str]:
    """Return file contents decoded as UTF-8, or None when unreadable."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return None


def load_package_json(root: Path) -> Optional[Dict[str, object]]:
    """Return the parsed package.json mapping, or None if absent or malformed."""
    package_json = root / "package.json"
    if not package_json.is_file():
        return None
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable package.json in %s: %s", root, exc)
        return None
    if isinstance(data, dict):
        return data
    return None


def load_node_dependencies(root: Path) -> Dict[str, List[str]]:
    """Return Node.js dependencies split into runtime/dev lists in declaration order."""
    data = load_package_json(root) or {}

    def _extract(key: str) -> List[str]:
        deps = data.get(key)
        if isinstance(deps, dict):
            return [str(name) for name in deps.keys()]
        return []

    return {
        "dependencies": _extract("dependencies"),
        "devDependencies": _extract("devDependencies"),
    }


def load_python_dependencies(root: Path) -> List[str]:
    """Collect Python dependency names from requirements.txt and pyproject.toml."""
    deps: Dict[str, None] = {}

    requirements = root / "requirements.txt"
    if requirements.is_file():
        for name in _parse_requirements(requirements):
            deps.setdefault(name, None)

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        for name in _parse_pyproject(pyproject):
            deps.setdefault(name, None)

    return list(deps)


def _parse_requirements(path: Path) -> List[str]:
    text = read_text(path)
    if text is None:
        return []
    packages: List[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "-")):
            continue
        name = _REQUIREMENT_NAME.split(stripped, 1)[0].strip()
        if name:
            packages.append(name)
    return packages


def _parse_pyproject(path: Path) -> List[str]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return []

    dependencies: List[object] = []
    project = data.get("project")
    if isinstance(project, dict):
        declared = project.get("dependencies")
        if isinstance(declared, list):
            dependencies.extend(declared)
        optional = project.get("optional-dependencies")
        if isinstance(optional, dict):
            for values in optional.values():
                if isinstance(values, list):
                    dependencies.extend(values)

    tool = data.get("tool")
    poetry = tool.get("poetry", {}) if isinstance(tool, dict) else {}
    if isinstance(poetry, dict):
        poetry_deps = poetry.get("dependencies", {}) or {}
        if isinstance(poetry_deps, dict):
            dependencies.extend(poetry_deps.keys())

    packages: List[str] = []
    for dep in dependencies:
        if not isinstance(dep, str):
            continue
        name = _REQUIREMENT_NAME.split(dep, 1)[0].strip()
        if name and name.lower() != "python":
            packages.append(name)
    return packages
