"""Bounded directory scanning and the in-memory tree model."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, List

from .logging import get_logger
from .models import DirectoryNode, FileEntry

DEFAULT_MAX_DEPTH = 3

_IGNORED_DIRS: FrozenSet[str] = frozenset(
    {
        "node_modules",
        ".git",
        "dist",
        "build",
        ".next",
        ".cache",
        "coverage",
        ".vscode",
        ".idea",
        "__pycache__",
        "vendor",
        "target",
    }
)

_IGNORED_FILES: FrozenSet[str] = frozenset(
    {
        ".DS_Store",
        "thumbs.db",
        ".env",
        ".env.local",
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
    }
)

logger = get_logger("scanner")


@dataclass(frozen=True)
class ScanRules:
    """Names of directories and files the scanner skips.

    Ignored directories are recorded on their parent node as ``compressed``;
    ignored files are dropped from the model entirely.
    """

    ignore_dirs: FrozenSet[str] = _IGNORED_DIRS
    ignore_files: FrozenSet[str] = _IGNORED_FILES

    def extended(self, dirs: Iterable[str] = (), files: Iterable[str] = ()) -> "ScanRules":
        """Return a copy with additional names; built-in names are never removed."""
        return ScanRules(
            ignore_dirs=self.ignore_dirs | frozenset(dirs),
            ignore_files=self.ignore_files | frozenset(files),
        )


DEFAULT_RULES = ScanRules()


def count_lines(path: str | Path) -> int:
    """Return the number of text lines in ``path``, or 0 if it cannot be read."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.debug("Could not read %s for line count: %s", path, exc)
        return 0
    if not data:
        return 0
    lines = data.count(b"\n")
    if not data.endswith(b"\n"):
        lines += 1
    return lines


class DirectoryScanner:
    """Walks a directory depth-first to a bounded depth."""

    def __init__(self, rules: ScanRules = DEFAULT_RULES) -> None:
        self.rules = rules

    def scan(self, root: str | Path, max_depth: int = DEFAULT_MAX_DEPTH) -> DirectoryNode:
        """Return the tree rooted at ``root``.

        The root sits at depth 0; directories deeper than ``max_depth`` are
        not represented at all. Listing errors leave that branch empty.
        """
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        node = DirectoryNode(name=root_path.name or str(root_path), path=str(root_path))
        self._fill(node, root_path, 0, max_depth)
        return node

    def _fill(self, node: DirectoryNode, directory: Path, depth: int, max_depth: int) -> None:
        for entry in self._list(directory):
            try:
                is_dir = entry.is_dir()
            except OSError as exc:
                logger.debug("Skipping %s: %s", entry.path, exc)
                continue

            if is_dir:
                if entry.name in self.rules.ignore_dirs:
                    node.compressed.append(entry.name)
                    continue
                if depth + 1 > max_depth:
                    continue
                child = DirectoryNode(name=entry.name, path=entry.path)
                self._fill(child, Path(entry.path), depth + 1, max_depth)
                node.dirs.append(child)
                continue

            if entry.name in self.rules.ignore_files:
                continue
            try:
                size = entry.stat().st_size
            except OSError as exc:
                logger.debug("Skipping %s: %s", entry.path, exc)
                continue
            node.files.append(
                FileEntry(
                    name=entry.name,
                    path=entry.path,
                    size=size,
                    lines=count_lines(entry.path) if size > 0 else 0,
                )
            )

    @staticmethod
    def _list(directory: Path) -> List[os.DirEntry]:
        try:
            with os.scandir(directory) as iterator:
                entries = list(iterator)
        except OSError as exc:
            logger.debug("Could not list %s: %s", directory, exc)
            return []
        entries.sort(key=lambda entry: entry.name)
        return entries


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_RULES",
    "DirectoryScanner",
    "ScanRules",
    "count_lines",
]
