"""Heuristic red-flag detection over a scanned project tree."""

from __future__ import annotations

import os
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..config import RedFlagConfig
from ..git import GitHistory
from ..logging import get_logger
from ..models import DirectoryNode, FileEntry
from .dependencies import UnusedDependencyFinder
from .utils import SCRIPT_SUFFIXES, TODO_SUFFIXES, read_text, root_entries

_CONSOLE_CALL = re.compile(r"console\.(log|warn|error)")
_TODO_MARKER = re.compile(r"TODO|FIXME|HACK", re.IGNORECASE)

# Lockfile -> package manager, in reporting order.
LOCKFILES: Tuple[Tuple[str, str], ...] = (
    ("package-lock.json", "npm"),
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
)

logger = get_logger("analyzers.red_flags")


@dataclass(frozen=True)
class _TodoLine:
    name: str
    relative_path: str
    line: int


class RedFlagAnalyzer:
    """Composes the independent red-flag signals into one capped list.

    Signals are appended in a fixed order: massive files, console noise,
    case-insensitive duplicate names, multiple package managers, stale TODOs
    and unused dependencies. Blame lookups for TODO lines run concurrently
    but are all joined before :meth:`analyze` returns.
    """

    def __init__(
        self,
        settings: Optional[RedFlagConfig] = None,
        git: Optional[GitHistory] = None,
        dependency_finder: Optional[UnusedDependencyFinder] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings or RedFlagConfig()
        self.git = git or GitHistory()
        self.dependency_finder = dependency_finder or UnusedDependencyFinder()
        self._today = today

    def analyze(self, root: str | Path, tree: DirectoryNode) -> List[str]:
        root_path = Path(root).resolve()
        cap = self.settings.max_flags
        files = list(tree.iter_files())

        flags: List[str] = []
        flags.extend(self.massive_files(files))
        flags.extend(self.console_noise(files))
        flags.extend(self.duplicate_names(files))
        flags.extend(self.package_managers(root_path))
        if len(flags) < cap:
            flags.extend(self.stale_todos(root_path, files, budget=cap - len(flags)))

        unused = self.dependency_finder.find_unused(root_path)
        if unused:
            flags.append(f"Potentially unused dependencies: {', '.join(unused)}")

        return flags[:cap]

    def massive_files(self, files: Iterable[FileEntry]) -> List[str]:
        limit = self.settings.massive_file_lines
        return [
            f"Massive file: {entry.name} ({entry.lines} lines)"
            for entry in files
            if entry.lines > limit
        ]

    def console_noise(self, files: Iterable[FileEntry]) -> List[str]:
        flags: List[str] = []
        for entry in files:
            if not entry.name.endswith(SCRIPT_SUFFIXES):
                continue
            text = read_text(entry.path)
            if text is None:
                continue
            count = len(_CONSOLE_CALL.findall(text))
            if count > self.settings.log_statement_limit:
                flags.append(f"{count} console statements in {entry.name}")
        return flags

    @staticmethod
    def duplicate_names(files: Iterable[FileEntry]) -> List[str]:
        groups: Dict[str, Dict[str, None]] = {}
        for entry in files:
            groups.setdefault(entry.name.lower(), {})[entry.name] = None
        return [
            f"Duplicate files: {', '.join(originals)}"
            for originals in groups.values()
            if len(originals) > 1
        ]

    @staticmethod
    def package_managers(root: Path) -> List[str]:
        present = root_entries(root)
        managers = [manager for lockfile, manager in LOCKFILES if lockfile in present]
        if len(managers) > 1:
            return [f"Multiple package managers: {' + '.join(managers)}"]
        return []

    def stale_todos(self, root: Path, files: Iterable[FileEntry], budget: int) -> List[str]:
        """Return flags for TODO/FIXME/HACK lines last changed too long ago.

        Lookups run in batches so that no further blame calls are issued
        once ``budget`` flags have been collected.
        """
        if budget <= 0 or not self.git.is_repository(root):
            return []

        todos = list(self._todo_lines(root, files))
        if not todos:
            return []

        today = self._today()
        workers = max(1, self.settings.blame_workers)
        flags: List[str] = []
        with ThreadPoolExecutor(max_workers=workers) as executor:
            for start in range(0, len(todos), workers):
                batch = todos[start : start + workers]
                dates = executor.map(
                    lambda todo: self.git.blame_date(root, todo.relative_path, todo.line), batch
                )
                for todo, changed in zip(batch, dates):
                    if changed is None:
                        continue
                    age = (today - changed).days
                    if age > self.settings.stale_todo_days:
                        flags.append(f"Old TODO in {todo.name} ({age} days old)")
                if len(flags) >= budget:
                    break
        logger.debug("Checked %d TODO lines, %d stale", len(todos), len(flags))
        return flags

    @staticmethod
    def _todo_lines(root: Path, files: Iterable[FileEntry]) -> Iterable[_TodoLine]:
        for entry in files:
            if not entry.name.endswith(TODO_SUFFIXES):
                continue
            text = read_text(entry.path)
            if text is None:
                continue
            relative = Path(os.path.relpath(entry.path, root)).as_posix()
            for index, line in enumerate(text.split("\n"), start=1):
                if _TODO_MARKER.search(line):
                    yield _TodoLine(name=entry.name, relative_path=relative, line=index)


__all__ = ["RedFlagAnalyzer"]
